"""
Configuration module for the explore service.

All configuration values are loaded from environment variables with sensible defaults.
See .env.example for all available configuration options.
"""
import os
from dataclasses import dataclass, field


def _get_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.getenv(key, default))


def _get_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    return int(os.getenv(key, default))


def _get_bool(key: str, default: bool) -> bool:
    """Get bool from environment variable ("1", "true", "yes" are truthy)."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SUPPORTED_BACKENDS = ("sql", "memory")


@dataclass
class ServiceConfig:
    """Backend selection and per-request limits."""

    # "sql" uses the relational table, "memory" the in-process map
    backend: str = field(default_factory=lambda: os.getenv("DECISION_BACKEND", "sql").strip().lower())
    request_timeout_seconds: float = field(default_factory=lambda: _get_float("REQUEST_TIMEOUT_SECONDS", 5.0))
    list_decisions_max_limit: int = field(default_factory=lambda: _get_int("LIST_DECISIONS_MAX_LIMIT", 100))
    service_name: str = field(default_factory=lambda: os.getenv("SERVICE_NAME", "explore-service"))

    def __post_init__(self):
        if self.backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"DECISION_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)}, got {self.backend!r}"
            )


@dataclass
class DatabaseConfig:
    """Connection settings for the SQL backend."""

    host: str = field(default_factory=lambda: os.getenv("DB_HOST", "localhost"))
    port: str = field(default_factory=lambda: os.getenv("DB_PORT", "5432"))
    user: str = field(default_factory=lambda: os.getenv("DB_USER", "postgres"))
    password: str = field(default_factory=lambda: os.getenv("DB_PASSWORD", "postgres"))
    name: str = field(default_factory=lambda: os.getenv("DB_NAME", "explore"))
    echo: bool = field(default_factory=lambda: _get_bool("DB_ECHO", False))
    create_tables: bool = field(default_factory=lambda: _get_bool("DB_CREATE_TABLES", True))
    url_override: str = field(default_factory=lambda: os.getenv("DATABASE_URL", ""))

    @property
    def url(self) -> str:
        """DATABASE_URL if provided, else a PostgreSQL (asyncpg) URL built from components."""
        if self.url_override:
            return self.url_override
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


# Global config instances (lazy loaded)
_service_config = None
_database_config = None


def get_service_config() -> ServiceConfig:
    """Get service configuration."""
    global _service_config
    if _service_config is None:
        _service_config = ServiceConfig()
    return _service_config


def get_database_config() -> DatabaseConfig:
    """Get database configuration."""
    global _database_config
    if _database_config is None:
        _database_config = DatabaseConfig()
    return _database_config


def reload_config():
    """Force reload of all configuration from environment variables."""
    global _service_config, _database_config
    _service_config = ServiceConfig()
    _database_config = DatabaseConfig()
