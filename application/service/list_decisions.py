from typing import Optional
from domain.config import get_service_config
from domain.entities import Decision
from domain.exceptions import ValidationError
from domain.interfaces import DecisionRepository, MetricsPort
from domain.services.pagination import DEFAULT_LIMIT
from application.service.common import call_repository, require_identifier, resolve_timeout


class ListDecisionsService:
    """Decisions an actor has made, most recent first."""

    def __init__(self, decision_repo: DecisionRepository, metrics_port: Optional[MetricsPort] = None, timeout: Optional[float] = None):
        self.decision_repo = decision_repo
        self.metrics_port = metrics_port
        self.timeout = timeout

    async def execute(self, actor_id: str, limit: int = DEFAULT_LIMIT, offset: int = 0, timeout: Optional[float] = None) -> list[Decision]:
        require_identifier("actor_id", actor_id)
        max_limit = get_service_config().list_decisions_max_limit
        if limit < 1 or limit > max_limit:
            raise ValidationError(f"limit must be between 1 and {max_limit}")
        if offset < 0:
            raise ValidationError("offset must be non-negative")
        return await call_repository(
            "list_decisions",
            self.decision_repo.list_decisions(actor_id, limit, offset),
            resolve_timeout(timeout if timeout is not None else self.timeout),
            self.metrics_port,
        )
