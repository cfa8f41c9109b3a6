"""Read access to user actions"""

from typing import Dict, Iterable, List, Set
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models import UserAction
from ..utils.metrics import track_db_query


class ActionStore:
    """Queries over the ``user_actions`` table. Never writes."""

    def __init__(self, db: Session):
        self.db = db

    @track_db_query("actions_top_by_user")
    def top_by_user(self, user_id: int, limit: int) -> List[UserAction]:
        """Most recent actions of a user, newest first"""
        return (
            self.db.query(UserAction)
            .filter(UserAction.user_id == user_id)
            .order_by(UserAction.timestamp.desc(), UserAction.id.desc())
            .limit(limit)
            .all()
        )

    @track_db_query("actions_by_event_ids")
    def by_event_ids(self, event_ids: Iterable[int]) -> List[UserAction]:
        """All actions, from any user, on the given events"""
        ids = set(event_ids)
        if not ids:
            return []

        return (
            self.db.query(UserAction)
            .filter(UserAction.event_id.in_(sorted(ids)))
            .order_by(UserAction.id)
            .all()
        )

    @track_db_query("actions_distinct_events_by_user")
    def distinct_event_ids_by_user_excluding(self, user_id: int, exclude_event_id: int) -> Set[int]:
        """Events the user has interacted with, apart from ``exclude_event_id``"""
        rows = (
            self.db.query(UserAction.event_id)
            .filter(
                UserAction.user_id == user_id,
                UserAction.event_id != exclude_event_id
            )
            .distinct()
            .all()
        )
        return {event_id for (event_id,) in rows}

    @track_db_query("actions_total_weights_by_user")
    def total_weights_by_user(self, user_id: int, event_ids: Iterable[int]) -> Dict[int, float]:
        """
        Summed weight of one user's actions per event

        Events without any action by the user are absent from the result.
        """
        ids = set(event_ids)
        if not ids:
            return {}

        rows = (
            self.db.query(UserAction.event_id, func.sum(UserAction.weight))
            .filter(
                UserAction.user_id == user_id,
                UserAction.event_id.in_(sorted(ids))
            )
            .group_by(UserAction.event_id)
            .all()
        )
        return {event_id: float(total) for event_id, total in rows}
