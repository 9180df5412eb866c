"""
Dependency wiring for the v1 router.

The backend is chosen once from DECISION_BACKEND. The in-memory repository is
owned by the application (app.state.decision_repo) so every request shares it,
while the SQL repository wraps a per-request session.
"""
from typing import AsyncIterator
from fastapi import Depends, Request

from domain.interfaces import DecisionRepository
from infrastructure.clock import SystemClock
from infrastructure.logging.logging_adapter import LoggingAdapter
from infrastructure.metrics.metrics_adapter import MetricsAdapter

metrics_adapter = MetricsAdapter()
clock = SystemClock()


async def get_decision_repo(request: Request) -> AsyncIterator[DecisionRepository]:
    repo = getattr(request.app.state, "decision_repo", None)
    if repo is not None:
        yield repo
        return

    # Imported here so the memory backend never loads the database driver
    from infrastructure.db.database import get_session_factory
    from infrastructure.db.repositories.decision_repo_sqlalchemy import DecisionRepoSqlalchemy

    async with get_session_factory()() as session:
        yield DecisionRepoSqlalchemy(session)


def get_logging_adapter(repo: DecisionRepository = Depends(get_decision_repo)) -> LoggingAdapter:
    # resolved once per request, so this is the repository the handler uses
    return LoggingAdapter(repository=type(repo).__name__)
