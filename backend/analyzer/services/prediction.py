"""Item-based score prediction from neighbor similarities"""

import numpy as np
from typing import Collection, Dict, Iterable, List, Optional

from ..models import EventSimilarity
from ..stores import ActionStore
from ..utils.logging import get_logger
from .neighbors import NeighborResolver

logger = get_logger(__name__)


def select_candidate(similarity: EventSimilarity, user_events: Collection[int]) -> Optional[int]:
    """
    Pick the endpoint of ``similarity`` the user has not seen yet

    Returns None when both or neither endpoint belongs to ``user_events``:
    such a row does not link a known event to a new one and carries no
    candidate.
    """
    a_known = similarity.event_a in user_events
    b_known = similarity.event_b in user_events
    if a_known == b_known:
        return None
    return similarity.event_b if a_known else similarity.event_a


def weighted_average(
    neighbors: List[EventSimilarity],
    candidate_id: int,
    weights: Dict[int, float]
) -> float:
    """
    Similarity-weighted average of the user's weights on a candidate's neighbors

    sum(weight_i * similarity_i) / sum(similarity_i), with neighbors the user
    never touched contributing weight 0. A zero similarity sum (including no
    neighbors at all) yields 0.0.
    """
    if not neighbors:
        return 0.0

    similarities = np.array([neighbor.score for neighbor in neighbors], dtype=float)
    values = np.array(
        [weights.get(neighbor.other(candidate_id), 0.0) for neighbor in neighbors],
        dtype=float
    )

    similarity_sum = similarities.sum()
    if similarity_sum == 0:
        return 0.0

    return float(np.dot(values, similarities) / similarity_sum)


class ScorePredictor:
    """
    Predicts a user's affinity for candidate events

    A candidate is scored from the user's weights on the events most similar
    to it: "how much would this user like the candidate, judging by how much
    they liked its nearest neighbors".
    """

    def __init__(self, action_store: ActionStore, neighbor_resolver: NeighborResolver):
        self.action_store = action_store
        self.neighbor_resolver = neighbor_resolver

    def predict_scores(
        self,
        user_id: int,
        similarities: Iterable[EventSimilarity],
        user_events: Iterable[int]
    ) -> Dict[int, float]:
        """
        Predict scores for every candidate found in ``similarities``

        Args:
            user_id: User the prediction is made for
            similarities: Rows linking the user's events to candidates
            user_events: Events the user already interacted with

        Returns:
            Mapping of candidate event id to predicted score, in order of first
            appearance of each candidate in ``similarities``
        """
        known = set(user_events)

        candidates: Dict[int, None] = {}
        for similarity in similarities:
            candidate = select_candidate(similarity, known)
            if candidate is None:
                logger.debug(
                    "Skipping similarity without a single unseen endpoint",
                    event_a=similarity.event_a,
                    event_b=similarity.event_b
                )
                continue
            candidates.setdefault(candidate, None)

        if not candidates:
            return {}

        neighbors_by_candidate = self.neighbor_resolver.resolve(candidates)

        neighbor_ids = {
            neighbor.other(candidate)
            for candidate, neighbors in neighbors_by_candidate.items()
            for neighbor in neighbors
        }
        weights = self.action_store.total_weights_by_user(user_id, neighbor_ids)

        return {
            candidate: weighted_average(neighbors_by_candidate.get(candidate, []), candidate, weights)
            for candidate in candidates
        }
