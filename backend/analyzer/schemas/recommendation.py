"""Recommendation schemas"""

from pydantic import BaseModel, Field
from typing import List

from ..config import settings


class UserPredictionsRequest(BaseModel):
    """Schema for requesting personalized recommendations"""

    user_id: int
    max_results: int = Field(default=10, ge=0, le=settings.MAX_RESULTS_LIMIT)


class SimilarEventsRequest(BaseModel):
    """Schema for requesting events similar to a given one"""

    user_id: int
    event_id: int
    max_results: int = Field(default=10, ge=0, le=settings.MAX_RESULTS_LIMIT)


class InteractionsCountRequest(BaseModel):
    """Schema for requesting summed interaction weights"""

    event_ids: List[int] = Field(default_factory=list)


class RecommendedEvent(BaseModel):
    """A single recommended event with its score"""

    event_id: int
    score: float

    class Config:
        from_attributes = True
