"""Nearest-neighbor lookup over precomputed event similarities"""

from typing import Dict, Iterable, List, Optional

from ..config import settings
from ..models import EventSimilarity
from ..stores import SimilarityStore


class NeighborResolver:
    """
    Resolves the most similar events of a given event

    ``k`` defaults to ``settings.NEIGHBOR_COUNT`` (5): the number of neighbors
    consulted per candidate. It bounds the work done for each candidate.
    """

    def __init__(self, similarity_store: SimilarityStore, k: Optional[int] = None):
        self.similarity_store = similarity_store
        self.k = settings.NEIGHBOR_COUNT if k is None else k

    def top_neighbors(self, event_id: int, k: Optional[int] = None) -> List[EventSimilarity]:
        """Top-k rows involving ``event_id``, score descending"""
        return self.similarity_store.top_neighbors(event_id, self.k if k is None else k)

    def resolve(self, candidate_ids: Iterable[int]) -> Dict[int, List[EventSimilarity]]:
        """
        Top-k rows for every candidate, fetched in one batch

        Candidates without any similarity map to an empty list.
        """
        return self.similarity_store.top_neighbors_batch(candidate_ids, self.k)
