"""Recommendation API endpoints"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import List

from ..schemas.recommendation import (
    UserPredictionsRequest,
    SimilarEventsRequest,
    InteractionsCountRequest,
    RecommendedEvent,
)
from ..config import settings
from ..services.recommendation import RecommendationEngine
from ..utils.database import get_db
from ..utils.rate_limit import limiter

router = APIRouter()


def get_engine(db: Session = Depends(get_db)) -> RecommendationEngine:
    """Per-request engine bound to the request's database session"""
    return RecommendationEngine.from_session(db)


@router.post("/user", response_model=List[RecommendedEvent])
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
def get_recommendations_for_user(
    request: Request,
    body: UserPredictionsRequest,
    engine: RecommendationEngine = Depends(get_engine)
):
    """
    Get personalized event recommendations for a user

    Scores are neighbor-weighted averages of the user's past weights; the
    list is not sorted by score.
    """
    return engine.get_recommendations_for_user(body.user_id, body.max_results)


@router.post("/similar", response_model=List[RecommendedEvent])
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
def get_similar_events(
    request: Request,
    body: SimilarEventsRequest,
    engine: RecommendationEngine = Depends(get_engine)
):
    """Get events similar to a given one, excluding events the user already saw"""
    return engine.get_similar_events(body.user_id, body.event_id, body.max_results)


@router.post("/interactions-count", response_model=List[RecommendedEvent])
def get_interactions_count(
    body: InteractionsCountRequest,
    engine: RecommendationEngine = Depends(get_engine)
):
    """Get summed interaction weight per event"""
    return engine.get_interactions_count(body.event_ids)
