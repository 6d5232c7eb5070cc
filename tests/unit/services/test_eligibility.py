"""Unit tests for engagement scoring and coin eligibility."""

import itertools

import pytest

from dspy_memecoin.models.meme import EngagementMetrics
from dspy_memecoin.services.eligibility import (
    MIN_ENGAGEMENT_SCORE,
    calculate_engagement_score,
    is_eligible_for_coin,
)


def test_score_weights() -> None:
    metrics = EngagementMetrics(views=7, likes=1, shares=1, downloads=1, comments=1)

    assert calculate_engagement_score(metrics) == 3 + 5 + 2 + 4 + 7


def test_score_of_empty_metrics_is_zero() -> None:
    assert calculate_engagement_score(EngagementMetrics()) == 0


def test_score_is_independent_of_increment_order() -> None:
    """Test that applying the same increments in any order gives the same score."""
    increments = [{"likes": 4}, {"shares": 2}, {"views": 30}, {"comments": 1}, {"downloads": 3}]
    scores = set()
    for order in itertools.permutations(increments):
        metrics = EngagementMetrics()
        for delta in order:
            metrics.apply(delta)
        scores.add(calculate_engagement_score(metrics))

    assert len(scores) == 1


def test_exact_thresholds_are_eligible() -> None:
    metrics = EngagementMetrics(likes=10, shares=5, views=100)

    assert calculate_engagement_score(metrics) == 155
    assert is_eligible_for_coin(metrics) is True


@pytest.mark.parametrize(
    "counts",
    [
        {"likes": 20, "shares": 0, "views": 1000},
        {"likes": 9, "shares": 50, "views": 1000},
        {"likes": 100, "shares": 50, "views": 99},
    ],
)
def test_every_floor_is_mandatory(counts) -> None:
    """Test that a high score cannot make up for an unmet counter floor."""
    metrics = EngagementMetrics(**counts)

    assert calculate_engagement_score(metrics) >= MIN_ENGAGEMENT_SCORE
    assert is_eligible_for_coin(metrics) is False
