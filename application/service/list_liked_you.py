import time
from typing import Optional
from domain.entities import LikersPage
from domain.exceptions import ExploreError
from domain.interfaces import DecisionRepository, MetricsPort, LoggingPort
from domain.services.pagination import DEFAULT_LIMIT, decode_token, next_token
from application.service.common import bind_logger, call_repository, require_identifier, resolve_timeout


class ListLikedYouService:
    """Pages through the actors who liked a recipient, most recent first."""

    exclude_reciprocated = False
    event = "list_liked_you"

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

    async def execute(self, recipient_id: str, pagination_token: Optional[str] = None, timeout: Optional[float] = None) -> LikersPage:
        """
        Return one page of likers and the token for the next page.

        Args:
            recipient_id: User whose likers are listed
            pagination_token: Token from a previous page; empty or None for the first page
            timeout: Deadline override for this call (optional)

        Raises:
            ValidationError: If recipient_id is empty or the token is malformed
            RepositoryError: If the store fails or the deadline expires
        """
        require_identifier("recipient_id", recipient_id)
        offset = decode_token(pagination_token or "")
        deadline = resolve_timeout(timeout if timeout is not None else self.timeout)
        start_time = time.time()

        log = bind_logger(self.logging_port, recipient_id=recipient_id, step=self.event)

        try:
            likers = await call_repository(
                "list_likers",
                self.decision_repo.list_likers(
                    recipient_id,
                    exclude_reciprocated=self.exclude_reciprocated,
                    limit=DEFAULT_LIMIT,
                    offset=offset,
                ),
                deadline,
                self.metrics_port,
            )
        except ExploreError as e:
            log.error(f"{self.event}_failed", error=e.code, offset=offset, exc_info=True)
            raise

        page = LikersPage(likers=likers, next_pagination_token=next_token(offset, len(likers), DEFAULT_LIMIT))
        log.info(
            f"{self.event}_completed",
            offset=offset,
            returned=len(likers),
            has_more=bool(page.next_pagination_token),
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return page


class ListNewLikedYouService(ListLikedYouService):
    """Like ListLikedYouService, but drops likers the recipient already liked back."""

    exclude_reciprocated = True
    event = "list_new_liked_you"
