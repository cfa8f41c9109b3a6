"""Read access to precomputed event similarities"""

from typing import Dict, Iterable, List
from sqlalchemy import and_, func, not_, or_, select, union_all
from sqlalchemy.orm import Session

from ..models import EventSimilarity
from ..utils.metrics import track_db_query


class SimilarityStore:
    """
    Queries over the ``event_similarities`` table

    Pairs are undirected, so every lookup by event matches either endpoint.
    Ties on score are broken by row id so results are stable between calls.
    """

    def __init__(self, db: Session):
        self.db = db

    @track_db_query("similarities_newly_relevant")
    def newly_relevant(self, seed_event_ids: Iterable[int], limit: int) -> List[EventSimilarity]:
        """Rows linking exactly one seed event to an event outside the seed set"""
        seeds = set(seed_event_ids)
        if not seeds:
            return []

        a_is_seed = EventSimilarity.event_a.in_(sorted(seeds))
        b_is_seed = EventSimilarity.event_b.in_(sorted(seeds))

        return (
            self.db.query(EventSimilarity)
            .filter(or_(
                and_(a_is_seed, not_(b_is_seed)),
                and_(b_is_seed, not_(a_is_seed)),
            ))
            .order_by(EventSimilarity.score.desc(), EventSimilarity.id)
            .limit(limit)
            .all()
        )

    @track_db_query("similarities_by_event")
    def by_event_id(self, event_id: int) -> List[EventSimilarity]:
        return (
            self.db.query(EventSimilarity)
            .filter(or_(
                EventSimilarity.event_a == event_id,
                EventSimilarity.event_b == event_id
            ))
            .order_by(EventSimilarity.id)
            .all()
        )

    @track_db_query("similarities_top_neighbors")
    def top_neighbors(self, event_id: int, k: int) -> List[EventSimilarity]:
        """The ``k`` highest-scoring rows involving ``event_id``"""
        return (
            self.db.query(EventSimilarity)
            .filter(or_(
                EventSimilarity.event_a == event_id,
                EventSimilarity.event_b == event_id
            ))
            .order_by(EventSimilarity.score.desc(), EventSimilarity.id)
            .limit(k)
            .all()
        )

    @track_db_query("similarities_top_neighbors_batch")
    def top_neighbors_batch(self, event_ids: Iterable[int], k: int) -> Dict[int, List[EventSimilarity]]:
        """
        Top-``k`` neighbor rows for many events in a single query

        Each row is unfolded into one entry per endpoint ("anchor"), then
        ranked per anchor with ROW_NUMBER so the cap applies to every event
        independently.

        Returns:
            Mapping of every requested event id to its rows, score descending
        """
        ids = set(event_ids)
        neighbors: Dict[int, List[EventSimilarity]] = {event_id: [] for event_id in ids}
        if not ids or k <= 0:
            return neighbors

        anchored = union_all(
            select(
                EventSimilarity.id.label("similarity_id"),
                EventSimilarity.event_a.label("anchor"),
                EventSimilarity.score.label("score"),
            ).where(EventSimilarity.event_a.in_(sorted(ids))),
            select(
                EventSimilarity.id,
                EventSimilarity.event_b,
                EventSimilarity.score,
            ).where(EventSimilarity.event_b.in_(sorted(ids))),
        ).subquery()

        ranked = select(
            anchored.c.similarity_id,
            anchored.c.anchor,
            func.row_number().over(
                partition_by=anchored.c.anchor,
                order_by=(anchored.c.score.desc(), anchored.c.similarity_id),
            ).label("position"),
        ).subquery()

        rows = (
            self.db.query(ranked.c.anchor, EventSimilarity)
            .select_from(ranked)
            .join(EventSimilarity, EventSimilarity.id == ranked.c.similarity_id)
            .filter(ranked.c.position <= k)
            .order_by(ranked.c.anchor, ranked.c.position)
            .all()
        )

        for anchor, similarity in rows:
            neighbors[anchor].append(similarity)

        return neighbors
