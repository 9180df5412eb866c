from typing_extensions import Protocol
from typing import Any


class BoundLogger(Protocol):
    """Logger carrying bound context; keyword arguments become structured fields."""

    def info(self, event: str, **kwargs: Any) -> None: ...

    def warning(self, event: str, **kwargs: Any) -> None: ...

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        """
        Log an error event.

        Args:
            event: Event name, e.g. "record_decision_failed"
            exc_info: Attach the exception currently being handled
            **kwargs: Additional context fields
        """
        ...


class LoggingPort(Protocol):
    """Protocol for logging operations."""

    def bind(self, **kwargs: Any) -> BoundLogger:
        """Return a logger with ``kwargs`` attached to every event it emits."""
        ...


class NoOpLogger:
    """Bound logger that drops everything; used when no LoggingPort is wired."""

    def info(self, event: str, **kwargs: Any) -> None:
        pass

    def warning(self, event: str, **kwargs: Any) -> None:
        pass

    def error(self, event: str, exc_info: bool = False, **kwargs: Any) -> None:
        pass
