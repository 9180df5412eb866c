"""
Helpers shared by the explore use cases.

Every repository call goes through ``call_repository`` so it is bounded by the
caller's deadline, timed, and counted when it fails.
"""
import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from domain.config import get_service_config
from domain.exceptions import DeadlineExceededError, RepositoryError, ValidationError
from domain.interfaces import BoundLogger, LoggingPort, MetricsPort, NoOpLogger

T = TypeVar("T")


def require_identifier(name: str, value: Optional[str]) -> str:
    """Reject empty or blank identifiers with a ValidationError."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return value


def resolve_timeout(timeout: Optional[float]) -> float:
    """Per-call timeout if given, else REQUEST_TIMEOUT_SECONDS."""
    if timeout is not None:
        return timeout
    return get_service_config().request_timeout_seconds


def bind_logger(logging_port: Optional[LoggingPort], **context) -> BoundLogger:
    if logging_port:
        return logging_port.bind(**context)
    return NoOpLogger()


async def call_repository(
    operation: str,
    call: Awaitable[T],
    timeout: Optional[float],
    metrics_port: Optional[MetricsPort] = None,
) -> T:
    """
    Await a repository call under a deadline.

    On timeout the call is cancelled before it can finish a stale write and
    DeadlineExceededError is raised. RepositoryError passes through unchanged.

    Args:
        operation: Repository operation name used for metrics
        call: The repository coroutine
        timeout: Seconds to wait, or None for no deadline
        metrics_port: Optional metrics sink
    """
    start = time.perf_counter()
    try:
        if timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout)
    except asyncio.TimeoutError as e:
        if metrics_port:
            metrics_port.increment_repository_error(operation)
        raise DeadlineExceededError(f"{operation} did not complete within {timeout}s") from e
    except RepositoryError:
        if metrics_port:
            metrics_port.increment_repository_error(operation)
        raise
    finally:
        if metrics_port:
            metrics_port.observe_repository_latency(operation, time.perf_counter() - start)
