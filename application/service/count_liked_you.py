from typing import Optional
from domain.interfaces import DecisionRepository, MetricsPort
from application.service.common import call_repository, require_identifier, resolve_timeout


class CountLikedYouService:
    def __init__(self, decision_repo: DecisionRepository, metrics_port: Optional[MetricsPort] = None, timeout: Optional[float] = None):
        self.decision_repo = decision_repo
        self.metrics_port = metrics_port
        self.timeout = timeout

    async def execute(self, recipient_id: str, timeout: Optional[float] = None) -> int:
        """Total number of likes received by recipient_id, independent of paging."""
        require_identifier("recipient_id", recipient_id)
        return await call_repository(
            "count_likers",
            self.decision_repo.count_likers(recipient_id),
            resolve_timeout(timeout if timeout is not None else self.timeout),
            self.metrics_port,
        )
