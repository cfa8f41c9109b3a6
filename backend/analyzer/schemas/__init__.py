"""Pydantic schemas for request/response validation"""

from .recommendation import (
    UserPredictionsRequest,
    SimilarEventsRequest,
    InteractionsCountRequest,
    RecommendedEvent,
)

__all__ = [
    "UserPredictionsRequest",
    "SimilarEventsRequest",
    "InteractionsCountRequest",
    "RecommendedEvent",
]
