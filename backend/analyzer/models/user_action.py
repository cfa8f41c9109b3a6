"""User action model"""

from sqlalchemy import Column, Integer, Float, DateTime, Index, CheckConstraint
from .base import Base, TimestampMixin


class UserAction(Base, TimestampMixin):
    """Weighted interaction of a user with an event (view, like, register, ...)"""

    __tablename__ = "user_actions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    event_id = Column(Integer, nullable=False)
    weight = Column(Float, nullable=False, default=0.0)
    timestamp = Column(DateTime, nullable=False)

    # Several actions per (user, event) may coexist; readers sum the weights
    __table_args__ = (
        CheckConstraint("weight >= 0", name="ck_user_actions_weight_non_negative"),
        Index("ix_user_actions_user_timestamp", "user_id", "timestamp"),
        Index("ix_user_actions_event", "event_id"),
    )

    def __repr__(self):
        return f"<UserAction(user_id={self.user_id}, event_id={self.event_id}, weight={self.weight})>"
