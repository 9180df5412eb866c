from typing import List
from pydantic import BaseModel, Field


class DecisionCreate(BaseModel):
    actor_id: str = Field(..., min_length=1)
    recipient_id: str = Field(..., min_length=1)
    liked: bool


class RecordDecisionResponse(BaseModel):
    mutual: bool


class DecisionResponse(BaseModel):
    actor_id: str
    recipient_id: str
    liked: bool
    unix_timestamp: int = 0


class DeleteDecisionResponse(BaseModel):
    success: bool
    message: str


class LikerResponse(BaseModel):
    actor_id: str
    unix_timestamp: int = 0


class ListLikedYouResponse(BaseModel):
    likers: List[LikerResponse]
    next_pagination_token: str = ""


class CountLikedYouResponse(BaseModel):
    count: int
