from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from typing import Optional
from app.dependencies import clock, get_decision_repo, get_logging_adapter, metrics_adapter
from app.schemas.decision_schema import (
    CountLikedYouResponse,
    DecisionCreate,
    DecisionResponse,
    DeleteDecisionResponse,
    LikerResponse,
    ListLikedYouResponse,
    RecordDecisionResponse,
)
from application.service.count_liked_you import CountLikedYouService
from application.service.delete_decision import DeleteDecisionService
from application.service.get_decision import GetDecisionService
from application.service.list_decisions import ListDecisionsService
from application.service.list_liked_you import ListLikedYouService, ListNewLikedYouService
from application.service.record_decision import RecordDecisionService
from domain.entities import Decision, LikersPage
from domain.exceptions import NotFoundError
from domain.interfaces import DecisionRepository
from domain.services.pagination import DEFAULT_LIMIT
from infrastructure.logging.logging_adapter import LoggingAdapter

router = APIRouter(prefix="/v1")


def _decision_response(decision: Decision) -> DecisionResponse:
    return DecisionResponse(
        actor_id=decision.actor_id,
        recipient_id=decision.recipient_id,
        liked=decision.liked,
        unix_timestamp=decision.timestamp,
    )


def _likers_response(page: LikersPage) -> ListLikedYouResponse:
    return ListLikedYouResponse(
        likers=[LikerResponse(actor_id=liker.actor_id, unix_timestamp=liker.unix_timestamp) for liker in page.likers],
        next_pagination_token=page.next_pagination_token,
    )


@router.put("/decisions")
async def record_decision(
    payload: DecisionCreate,
    repo: DecisionRepository = Depends(get_decision_repo),
    logging_adapter: LoggingAdapter = Depends(get_logging_adapter),
) -> RecordDecisionResponse:
    """
    Record a like or pass from actor_id toward recipient_id.

    A second decision for the same pair replaces the first. `mutual` is true
    when this is a like and the recipient has already liked the actor.
    """
    srv = RecordDecisionService(
        decision_repo=repo,
        clock_port=clock,
        metrics_port=metrics_adapter,
        logging_port=logging_adapter,
    )
    result = await srv.execute(payload.actor_id, payload.recipient_id, payload.liked)
    return RecordDecisionResponse(mutual=result.mutual)


@router.get("/decisions")
async def list_decisions(
    actor_id: str,
    limit: int = Query(DEFAULT_LIMIT),
    offset: int = Query(0),
    repo: DecisionRepository = Depends(get_decision_repo),
) -> list[DecisionResponse]:
    """List the decisions an actor has made, most recent first."""
    srv = ListDecisionsService(repo, metrics_port=metrics_adapter)
    decisions = await srv.execute(actor_id, limit=limit, offset=offset)
    return [_decision_response(d) for d in decisions]


@router.get("/decisions/{actor_id}/{recipient_id}")
async def get_decision(
    actor_id: str,
    recipient_id: str,
    repo: DecisionRepository = Depends(get_decision_repo),
) -> DecisionResponse:
    srv = GetDecisionService(repo, metrics_port=metrics_adapter)
    decision = await srv.execute(actor_id, recipient_id)
    return _decision_response(decision)


@router.delete("/decisions/{actor_id}/{recipient_id}")
async def delete_decision(
    actor_id: str,
    recipient_id: str,
    repo: DecisionRepository = Depends(get_decision_repo),
    logging_adapter: LoggingAdapter = Depends(get_logging_adapter),
) -> DeleteDecisionResponse:
    srv = DeleteDecisionService(repo, metrics_port=metrics_adapter, logging_port=logging_adapter)
    try:
        result = await srv.execute(actor_id, recipient_id)
    except NotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=DeleteDecisionResponse(success=False, message=e.message).model_dump(),
        )
    return DeleteDecisionResponse(success=result.success, message=result.message)


@router.get("/liked-you/{recipient_id}")
async def list_liked_you(
    recipient_id: str,
    pagination_token: Optional[str] = None,
    repo: DecisionRepository = Depends(get_decision_repo),
    logging_adapter: LoggingAdapter = Depends(get_logging_adapter),
) -> ListLikedYouResponse:
    """
    List users who liked recipient_id, 20 per page, most recent first.

    Pass `next_pagination_token` back to get the next page; an empty token means
    there are no more results.
    """
    srv = ListLikedYouService(repo, metrics_port=metrics_adapter, logging_port=logging_adapter)
    return _likers_response(await srv.execute(recipient_id, pagination_token))


@router.get("/liked-you/{recipient_id}/new")
async def list_new_liked_you(
    recipient_id: str,
    pagination_token: Optional[str] = None,
    repo: DecisionRepository = Depends(get_decision_repo),
    logging_adapter: LoggingAdapter = Depends(get_logging_adapter),
) -> ListLikedYouResponse:
    """Same as /liked-you/{recipient_id}, excluding users the recipient already liked back."""
    srv = ListNewLikedYouService(repo, metrics_port=metrics_adapter, logging_port=logging_adapter)
    return _likers_response(await srv.execute(recipient_id, pagination_token))


@router.get("/liked-you/{recipient_id}/count")
async def count_liked_you(
    recipient_id: str,
    repo: DecisionRepository = Depends(get_decision_repo),
) -> CountLikedYouResponse:
    srv = CountLikedYouService(repo, metrics_port=metrics_adapter)
    return CountLikedYouResponse(count=await srv.execute(recipient_id))
