"""Event similarity model"""

from sqlalchemy import Column, Integer, Float, Index, CheckConstraint, UniqueConstraint
from .base import Base, TimestampMixin


class EventSimilarity(Base, TimestampMixin):
    """
    Precomputed similarity between two distinct events

    The relation is undirected: ``event_a``/``event_b`` carry no meaning beyond
    storage order, so callers should go through ``other()`` rather than reading
    a specific side.
    """

    __tablename__ = "event_similarities"

    id = Column(Integer, primary_key=True, index=True)
    event_a = Column(Integer, nullable=False)
    event_b = Column(Integer, nullable=False)
    score = Column(Float, nullable=False)

    __table_args__ = (
        CheckConstraint("event_a <> event_b", name="ck_event_similarities_distinct"),
        UniqueConstraint("event_a", "event_b", name="uq_event_similarities_pair"),
        Index("ix_event_similarities_event_a", "event_a"),
        Index("ix_event_similarities_event_b", "event_b"),
    )

    @classmethod
    def pair(cls, first: int, second: int, score: float) -> "EventSimilarity":
        """Build a row for an unordered pair, endpoints stored ascending"""
        if first == second:
            raise ValueError(f"Event {first} cannot be similar to itself")
        low, high = sorted((first, second))
        return cls(event_a=low, event_b=high, score=score)

    def involves(self, event_id: int) -> bool:
        return event_id in (self.event_a, self.event_b)

    def other(self, event_id: int) -> int:
        """
        Return the endpoint opposite to ``event_id``

        Raises:
            ValueError: If ``event_id`` is not an endpoint of this pair
        """
        if event_id == self.event_a:
            return self.event_b
        if event_id == self.event_b:
            return self.event_a
        raise ValueError(f"Event {event_id} is not part of similarity ({self.event_a}, {self.event_b})")

    def __repr__(self):
        return f"<EventSimilarity(event_a={self.event_a}, event_b={self.event_b}, score={self.score})>"
