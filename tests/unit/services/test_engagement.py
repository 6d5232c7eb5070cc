"""Unit tests for the engagement tracker."""

import random

import pytest

from dspy_memecoin.models.meme import COUNTER_NAMES, Meme, MemeState
from dspy_memecoin.services.engagement import VIRAL_GROWTH_ACTION, EngagementTracker
from dspy_memecoin.services.meme_store import MemeStore


@pytest.fixture
def meme(store: MemeStore, make_meme) -> Meme:
    return store.add(make_meme())


def test_increments_update_counters_and_history(tracker: EngagementTracker, meme: Meme) -> None:
    """Test that every increment bumps its counter and logs an entry."""
    before = meme.metrics.last_interaction

    tracker.increment_views(meme.id, 3)
    tracker.increment_likes(meme.id)
    tracker.increment_downloads(meme.id)
    tracker.increment_comments(meme.id, 2)

    assert (meme.metrics.views, meme.metrics.likes, meme.metrics.downloads, meme.metrics.comments) == (3, 1, 1, 2)
    assert meme.metrics.last_interaction >= before
    assert [e.action for e in tracker.get_engagement_history(meme.id)] == ["view", "like", "download", "comment"]
    assert meme.state is MemeState.ENGAGED


def test_share_records_platform(tracker: EngagementTracker, meme: Meme) -> None:
    tracker.increment_shares(meme.id, platform="twitter")
    tracker.increment_shares(meme.id)

    history = tracker.get_engagement_history(meme.id)
    assert meme.metrics.shares == 2
    assert [e.metadata["platform"] for e in history] == ["twitter", "unknown"]


def test_eligibility_refreshes_after_increments(tracker: EngagementTracker, meme: Meme) -> None:
    """Test that crossing every threshold makes the meme eligible."""
    tracker.increment_views(meme.id, 100)
    tracker.increment_likes(meme.id, 10)
    assert meme.eligible is False

    tracker.increment_shares(meme.id, amount=5)

    assert meme.eligible is True
    assert meme.state is MemeState.ELIGIBLE


def test_unknown_meme_returns_none(tracker: EngagementTracker) -> None:
    assert tracker.increment_likes("meme-missing") is None
    assert tracker.simulate_viral_growth("meme-missing") is None
    assert tracker.get_engagement_history("meme-missing") == []


def test_invalid_increments_are_rejected(tracker: EngagementTracker, meme: Meme) -> None:
    with pytest.raises(ValueError):
        tracker.increment(meme.id, "retweet")
    with pytest.raises(ValueError):
        tracker.increment_likes(meme.id, -1)
    assert meme.metrics.likes == 0


def test_track_engagement_leaves_counters_alone(tracker: EngagementTracker, meme: Meme) -> None:
    event = tracker.track_engagement(meme.id, "opened_coin_dialog", {"source": "dashboard"})

    assert event is not None
    assert event.metadata == {"source": "dashboard"}
    assert not meme.metrics.has_engagement()


def test_viral_growth_deltas_are_in_range() -> None:
    growth = EngagementTracker(MemeStore(), rng=random.Random(3)).viral_growth_deltas()

    assert 2 <= growth["multiplier"] < 7
    assert growth["deltas"]["views"] >= 1000
    assert set(growth["deltas"]) == set(COUNTER_NAMES)


def test_viral_growth_is_reproducible(make_meme) -> None:
    """Test that a fixed seed gives a fixed counter delta."""
    results = []
    for _ in range(2):
        store = MemeStore()
        meme = store.add(make_meme())
        EngagementTracker(store, rng=random.Random(2024)).simulate_viral_growth(meme.id)
        results.append({name: getattr(meme.metrics, name) for name in COUNTER_NAMES})

    assert results[0] == results[1]


def test_viral_growth_applies_drawn_deltas_once(store: MemeStore, make_meme) -> None:
    """Test that one viral burst applies exactly the drawn deltas and logs one entry."""
    meme = store.add(make_meme({"likes": 1}))
    expected = EngagementTracker(store, rng=random.Random(5)).viral_growth_deltas()

    EngagementTracker(store, rng=random.Random(5)).simulate_viral_growth(meme.id)

    deltas = expected["deltas"]
    assert meme.metrics.views == deltas["views"]
    assert meme.metrics.likes == 1 + deltas["likes"]
    history = store.history(meme.id)
    assert [e.action for e in history] == [VIRAL_GROWTH_ACTION]
    assert history[0].metadata["multiplier"] == pytest.approx(expected["multiplier"])
