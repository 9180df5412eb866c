import time
from dataclasses import dataclass
from typing import Optional
from domain.exceptions import NotFoundError
from domain.interfaces import DecisionRepository, MetricsPort, LoggingPort
from application.service.common import bind_logger, call_repository, require_identifier, resolve_timeout


@dataclass
class DeleteDecisionResult:
    success: bool
    message: str


class DeleteDecisionService:
    def __init__(
        self,
        decision_repo: DecisionRepository,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
        timeout: Optional[float] = None,
    ):
        self.decision_repo = decision_repo
        self.metrics_port = metrics_port
        self.logging_port = logging_port
        self.timeout = timeout

    async def execute(self, actor_id: str, recipient_id: str, timeout: Optional[float] = None) -> DeleteDecisionResult:
        """
        Remove the decision for the pair entirely.

        Raises:
            ValidationError: If an identifier is empty
            NotFoundError: If no decision exists for the pair
            RepositoryError: If the store fails or the deadline expires
        """
        require_identifier("actor_id", actor_id)
        require_identifier("recipient_id", recipient_id)
        start_time = time.time()
        log = bind_logger(self.logging_port, actor_id=actor_id, recipient_id=recipient_id, step="delete_decision")

        deleted = await call_repository(
            "delete",
            self.decision_repo.delete(actor_id, recipient_id),
            resolve_timeout(timeout if timeout is not None else self.timeout),
            self.metrics_port,
        )
        log.info("delete_decision_completed", deleted=deleted, duration_ms=round((time.time() - start_time) * 1000, 2))
        if not deleted:
            raise NotFoundError("Decision not found")
        return DeleteDecisionResult(success=True, message="Decision deleted successfully")
