"""Recommendation engine: personalized, similar-event and popularity queries"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from ..exceptions import InvalidRequestError
from ..models import EventSimilarity
from ..schemas.recommendation import RecommendedEvent
from ..stores import ActionStore, SimilarityStore
from ..utils.logging import get_logger
from ..utils.metrics import record_recommendation, track_recommendation_time
from .neighbors import NeighborResolver
from .prediction import ScorePredictor

logger = get_logger(__name__)


def _validate_max_results(max_results) -> None:
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise InvalidRequestError(f"max_results must be an integer, got {max_results!r}")
    if max_results < 0:
        raise InvalidRequestError(f"max_results must be non-negative, got {max_results}")


class RecommendationEngine:
    """
    Item-based collaborative filtering over precomputed event similarities

    Holds only references to its stores, so one instance per request (or one
    shared instance over thread-safe stores) is equally valid.
    """

    def __init__(
        self,
        action_store: ActionStore,
        similarity_store: SimilarityStore,
        predictor: Optional[ScorePredictor] = None
    ):
        self.action_store = action_store
        self.similarity_store = similarity_store
        self.predictor = predictor or ScorePredictor(
            action_store,
            NeighborResolver(similarity_store)
        )

    @classmethod
    def from_session(cls, db: Session) -> "RecommendationEngine":
        """Build an engine whose stores read through ``db``"""
        return cls(ActionStore(db), SimilarityStore(db))

    @track_recommendation_time("user_predictions")
    def get_recommendations_for_user(self, user_id: int, max_results: int) -> List[RecommendedEvent]:
        """
        Recommend unseen events to a user

        Seeds are the user's ``max_results`` most recent actions; candidates come
        from the ``max_results`` best similarities linking a seed to an unseen
        event. Results are not re-ranked by predicted score.
        """
        _validate_max_results(max_results)

        actions = self.action_store.top_by_user(user_id, max_results)
        user_events = list(dict.fromkeys(action.event_id for action in actions))
        if not user_events:
            logger.info("No recent actions for user", user_id=user_id)
            return []

        similarities = self.similarity_store.newly_relevant(user_events, max_results)
        scores = self.predictor.predict_scores(user_id, similarities, user_events)

        logger.info(
            "Predicted recommendations for user",
            user_id=user_id,
            seed_events=len(user_events),
            candidates=len(scores)
        )
        return self._emit("user_predictions", _from_scores(scores))

    @track_recommendation_time("similar_events")
    def get_similar_events(self, user_id: int, event_id: int, max_results: int) -> List[RecommendedEvent]:
        """
        Events most similar to ``event_id`` that the user has not interacted with

        Ordered by similarity score, highest first, at most ``max_results`` long.
        """
        _validate_max_results(max_results)

        similarities = self.similarity_store.by_event_id(event_id)
        seen = self.action_store.distinct_event_ids_by_user_excluding(user_id, event_id)

        unseen = [
            similarity for similarity in similarities
            if similarity.event_a not in seen and similarity.event_b not in seen
        ]
        unseen.sort(key=lambda similarity: similarity.score, reverse=True)

        logger.info(
            "Resolved similar events",
            user_id=user_id,
            event_id=event_id,
            total=len(similarities),
            unseen=len(unseen)
        )
        return self._emit("similar_events", _from_similarities(unseen[:max_results], event_id))

    @track_recommendation_time("interactions_count")
    def get_interactions_count(self, event_ids: Iterable[int]) -> List[RecommendedEvent]:
        """
        Summed action weight per event, across all users

        Events without actions, or whose weights sum to zero, are left out.
        """
        requested = set(event_ids)
        if not requested:
            return []

        totals: Dict[int, float] = defaultdict(float)
        for action in self.action_store.by_event_ids(requested):
            totals[action.event_id] += action.weight

        counted = {event_id: total for event_id, total in totals.items() if total != 0}

        logger.info("Counted interactions", requested=len(requested), counted=len(counted))
        return self._emit("interactions_count", _from_scores(counted))

    @staticmethod
    def _emit(operation: str, events: List[RecommendedEvent]) -> List[RecommendedEvent]:
        record_recommendation(operation, len(events))
        return events


def _from_scores(scores: Dict[int, float]) -> List[RecommendedEvent]:
    return [RecommendedEvent(event_id=event_id, score=score) for event_id, score in scores.items()]


def _from_similarities(similarities: List[EventSimilarity], event_id: int) -> List[RecommendedEvent]:
    return [
        RecommendedEvent(event_id=similarity.other(event_id), score=similarity.score)
        for similarity in similarities
    ]
