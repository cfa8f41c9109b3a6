"""Tests for database models"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from analyzer.models import Base, UserAction, EventSimilarity


@pytest.fixture
def db_session():
    """Create a test database session"""

    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


def test_other_endpoint_from_either_side():
    similarity = EventSimilarity(event_a=3, event_b=8, score=0.5)

    assert similarity.other(3) == 8
    assert similarity.other(8) == 3


def test_other_endpoint_rejects_unrelated_event():
    similarity = EventSimilarity(event_a=3, event_b=8, score=0.5)

    with pytest.raises(ValueError):
        similarity.other(4)


def test_involves():
    similarity = EventSimilarity(event_a=3, event_b=8, score=0.5)

    assert similarity.involves(3)
    assert similarity.involves(8)
    assert not similarity.involves(1)


def test_pair_normalizes_endpoint_order():
    similarity = EventSimilarity.pair(9, 2, 0.7)

    assert (similarity.event_a, similarity.event_b) == (2, 9)
    assert similarity.score == 0.7


def test_pair_rejects_self_similarity():
    with pytest.raises(ValueError):
        EventSimilarity.pair(4, 4, 1.0)


def test_self_similarity_rejected_by_database(db_session):
    db_session.add(EventSimilarity(event_a=1, event_b=1, score=0.3))

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_duplicate_pair_rejected_by_database(db_session):
    db_session.add(EventSimilarity(event_a=1, event_b=2, score=0.3))
    db_session.commit()

    db_session.add(EventSimilarity(event_a=1, event_b=2, score=0.9))
    with pytest.raises(IntegrityError):
        db_session.commit()


def test_negative_weight_rejected_by_database(db_session):
    db_session.add(UserAction(user_id=1, event_id=1, weight=-1.0, timestamp=datetime(2026, 1, 1)))

    with pytest.raises(IntegrityError):
        db_session.commit()


def test_repeated_actions_on_same_event_allowed(db_session):
    db_session.add_all([
        UserAction(user_id=1, event_id=1, weight=1.0, timestamp=datetime(2026, 1, 1)),
        UserAction(user_id=1, event_id=1, weight=2.0, timestamp=datetime(2026, 1, 2)),
    ])
    db_session.commit()

    assert db_session.query(UserAction).count() == 2
