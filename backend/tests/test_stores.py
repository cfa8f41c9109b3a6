"""Tests for the action and similarity stores"""

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from analyzer.models import Base, UserAction, EventSimilarity
from analyzer.stores import ActionStore, SimilarityStore

START = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def db_session():
    """Create a test database session"""

    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture
def actions(db_session):
    """User 1 touched events 1, 2, 3 (event 1 twice); user 2 touched events 1 and 4"""

    rows = [
        UserAction(user_id=1, event_id=1, weight=1.0, timestamp=START),
        UserAction(user_id=1, event_id=2, weight=2.0, timestamp=START + timedelta(minutes=1)),
        UserAction(user_id=1, event_id=3, weight=4.0, timestamp=START + timedelta(minutes=2)),
        UserAction(user_id=1, event_id=1, weight=2.0, timestamp=START + timedelta(minutes=3)),
        UserAction(user_id=2, event_id=1, weight=4.0, timestamp=START),
        UserAction(user_id=2, event_id=4, weight=1.0, timestamp=START),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture
def similarities(db_session):
    rows = [
        EventSimilarity(id=1, event_a=1, event_b=2, score=0.9),
        EventSimilarity(id=2, event_a=1, event_b=5, score=0.8),
        EventSimilarity(id=3, event_a=6, event_b=1, score=0.7),
        EventSimilarity(id=4, event_a=2, event_b=7, score=0.95),
        EventSimilarity(id=5, event_a=5, event_b=6, score=0.6),
        EventSimilarity(id=6, event_a=5, event_b=7, score=0.6),
        EventSimilarity(id=7, event_a=5, event_b=8, score=0.1),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


def test_top_by_user_newest_first(db_session, actions):
    store = ActionStore(db_session)

    result = store.top_by_user(1, 3)

    assert [action.event_id for action in result] == [1, 3, 2]
    assert result[0].weight == 2.0


def test_top_by_user_unknown_user(db_session, actions):
    assert ActionStore(db_session).top_by_user(99, 10) == []


def test_by_event_ids_spans_users(db_session, actions):
    result = ActionStore(db_session).by_event_ids({1, 4})

    assert sorted((a.user_id, a.event_id) for a in result) == [(1, 1), (1, 1), (2, 1), (2, 4)]


def test_by_event_ids_empty_input(db_session, actions):
    assert ActionStore(db_session).by_event_ids([]) == []


def test_distinct_event_ids_excluding(db_session, actions):
    store = ActionStore(db_session)

    assert store.distinct_event_ids_by_user_excluding(1, 2) == {1, 3}
    assert store.distinct_event_ids_by_user_excluding(2, 7) == {1, 4}


def test_total_weights_by_user(db_session, actions):
    totals = ActionStore(db_session).total_weights_by_user(1, [1, 2, 4])

    # Event 1 sums both of user 1's actions; event 4 belongs to user 2 only
    assert totals == {1: 3.0, 2: 2.0}


def test_newly_relevant_needs_exactly_one_seed(db_session, similarities):
    result = SimilarityStore(db_session).newly_relevant([1, 2], 10)

    # (1, 2) links two seeds and is left out
    assert [s.id for s in result] == [4, 2, 3]


def test_newly_relevant_respects_limit(db_session, similarities):
    result = SimilarityStore(db_session).newly_relevant([1, 2], 2)

    assert [s.id for s in result] == [4, 2]


def test_newly_relevant_without_seeds(db_session, similarities):
    assert SimilarityStore(db_session).newly_relevant([], 10) == []


def test_by_event_id_matches_both_endpoints(db_session, similarities):
    result = SimilarityStore(db_session).by_event_id(1)

    assert {s.id for s in result} == {1, 2, 3}


def test_top_neighbors_orders_and_caps(db_session, similarities):
    result = SimilarityStore(db_session).top_neighbors(5, 2)

    # Ties at 0.6 resolve by row id
    assert [s.id for s in result] == [2, 5]


def test_top_neighbors_batch_matches_single_lookups(db_session, similarities):
    store = SimilarityStore(db_session)

    batch = store.top_neighbors_batch([1, 5, 7], 2)

    for event_id in (1, 5, 7):
        assert [s.id for s in batch[event_id]] == [s.id for s in store.top_neighbors(event_id, 2)]


def test_top_neighbors_batch_includes_unknown_events(db_session, similarities):
    batch = SimilarityStore(db_session).top_neighbors_batch([5, 42], 5)

    assert batch[42] == []
    assert [s.id for s in batch[5]] == [2, 5, 6, 7]


def test_top_neighbors_batch_empty_input(db_session, similarities):
    assert SimilarityStore(db_session).top_neighbors_batch([], 5) == {}
