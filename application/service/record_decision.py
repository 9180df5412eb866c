import time
from dataclasses import dataclass
from typing import Optional
from domain.entities import Decision
from domain.exceptions import ExploreError
from domain.interfaces import DecisionRepository, ClockPort, MetricsPort, LoggingPort
from application.service.common import bind_logger, call_repository, require_identifier, resolve_timeout


@dataclass
class RecordDecisionResult:
    mutual: bool
    decision: Decision


class RecordDecisionService:
    def __init__(
        self,
        decision_repo: DecisionRepository,
        clock_port: Optional[ClockPort] = None,
        metrics_port: Optional[MetricsPort] = None,
        logging_port: Optional[LoggingPort] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the record decision service.
        
        Args:
            decision_repo: Repository storing decisions (required)
            clock_port: Clock used to timestamp writes (optional, defaults to wall clock)
            metrics_port: Metrics port for emitting metrics (optional)
            logging_port: Logging port for structured logging (optional)
            timeout: Deadline in seconds for each repository call (optional, defaults to config)
        """
        self.decision_repo = decision_repo
        self.clock_port = clock_port
        self.metrics_port = metrics_port
        self.logging_port = logging_port
        self.timeout = timeout

    def _now(self) -> int:
        if self.clock_port:
            return self.clock_port.now()
        return int(time.time())
    
    async def execute(self, actor_id: str, recipient_id: str, liked: bool, timeout: Optional[float] = None) -> RecordDecisionResult:
        """
        Record a like or pass from actor_id toward recipient_id.

        A like is followed by a reciprocal lookup; a pass never reads the
        reciprocal row and is never mutual.

        Args:
            actor_id: User making the decision
            recipient_id: User being decided about
            liked: True for like, False for pass
            timeout: Deadline override for this call (optional)

        Raises:
            ValidationError: If an identifier is empty
            RepositoryError: If the store fails or the deadline expires
        """
        require_identifier("actor_id", actor_id)
        require_identifier("recipient_id", recipient_id)
        deadline = resolve_timeout(timeout if timeout is not None else self.timeout)
        start_time = time.time()

        log = bind_logger(
            self.logging_port,
            actor_id=actor_id,
            recipient_id=recipient_id,
            step="record_decision",
        )
        log.info("record_decision_started", liked=liked)
        if actor_id == recipient_id:
            # stored like any other pair; a self-like reports itself as mutual
            log.warning("self_decision", liked=liked)

        try:
            decision = await call_repository(
                "upsert",
                self.decision_repo.upsert(actor_id, recipient_id, liked, self._now()),
                deadline,
                self.metrics_port,
            )

            mutual = False
            if liked:
                mutual = await call_repository(
                    "exists_reciprocal",
                    self.decision_repo.exists_reciprocal(actor_id, recipient_id),
                    deadline,
                    self.metrics_port,
                )

            if self.metrics_port:
                self.metrics_port.increment_decision_total(kind="like" if liked else "pass")
                if mutual:
                    self.metrics_port.increment_mutual_match()

            log.info(
                "record_decision_completed",
                liked=liked,
                mutual=mutual,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            return RecordDecisionResult(mutual=mutual, decision=decision)

        except ExploreError as e:
            log.error(
                "record_decision_failed",
                error=e.code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
                exc_info=True,
            )
            raise
