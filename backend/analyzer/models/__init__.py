"""Database models"""

from .base import Base
from .user_action import UserAction
from .event_similarity import EventSimilarity

__all__ = [
    "Base",
    "UserAction",
    "EventSimilarity",
]
