from typing import Optional
from domain.entities import Decision
from domain.exceptions import NotFoundError
from domain.interfaces import DecisionRepository, MetricsPort
from application.service.common import call_repository, require_identifier, resolve_timeout


class GetDecisionService:
    def __init__(self, decision_repo: DecisionRepository, metrics_port: Optional[MetricsPort] = None, timeout: Optional[float] = None):
        self.decision_repo = decision_repo
        self.metrics_port = metrics_port
        self.timeout = timeout

    async def execute(self, actor_id: str, recipient_id: str, timeout: Optional[float] = None) -> Decision:
        """Get the decision actor_id made about recipient_id, or raise NotFoundError."""
        require_identifier("actor_id", actor_id)
        require_identifier("recipient_id", recipient_id)
        decision = await call_repository(
            "get_decision",
            self.decision_repo.get_decision(actor_id, recipient_id),
            resolve_timeout(timeout if timeout is not None else self.timeout),
            self.metrics_port,
        )
        if decision is None:
            raise NotFoundError("Decision not found")
        return decision
