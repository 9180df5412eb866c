from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from domain.config import get_service_config, get_database_config
from domain.exceptions import ExploreError, RepositoryError
from domain.interfaces import DecisionRepository
from infrastructure.logging.structlog_logs import logger
from infrastructure.memory import InMemoryDecisionRepository
from infrastructure.metrics.metrics import metrics_endpoint
from app.routers.v1 import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    uses_sql = getattr(app.state, "decision_repo", None) is None
    if uses_sql:
        from infrastructure.db.database import create_tables, dispose_engine
        if get_database_config().create_tables:
            await create_tables()
    logger.info("explore_service_started", backend="sql" if uses_sql else "memory")
    yield
    if uses_sql:
        await dispose_engine()
    logger.info("explore_service_stopped")


async def explore_error_handler(request: Request, exc: ExploreError) -> JSONResponse:
    """Render domain errors as {"detail": {"error": code, "message": ...}}."""
    log = logger.bind(path=request.url.path, method=request.method, error=exc.code)
    if isinstance(exc, RepositoryError):
        # the cause may hold driver text; it goes to the log only
        log.error("request_failed", message=exc.message, cause=repr(exc.__cause__))
    else:
        log.warning("request_rejected", message=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})


def create_app(decision_repo: Optional[DecisionRepository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        decision_repo: Repository shared by all requests. When omitted, the
            in-memory repository is created for DECISION_BACKEND=memory and a
            per-request SQL repository is used otherwise.
    """
    app = FastAPI(title="explore-service", lifespan=lifespan)

    if decision_repo is None and get_service_config().backend == "memory":
        decision_repo = InMemoryDecisionRepository()
    app.state.decision_repo = decision_repo

    app.add_exception_handler(ExploreError, explore_error_handler)

    @app.get("/metrics")
    async def metrics():
        return metrics_endpoint()

    @app.get("/health")
    async def health():
        return {"status": "ok", "message": "explore-service is running"}

    app.include_router(router)
    return app


app = create_app()
