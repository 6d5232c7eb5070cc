"""Engagement scoring and coin eligibility rules.

Pure functions over engagement counters. The weights and thresholds are fixed:
a share signals more commitment than a like, a like more than a view.
"""

from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:
    from ..models.meme import EngagementMetrics

ENGAGEMENT_WEIGHTS: Dict[str, int] = {
    "likes": 3,
    "shares": 5,
    "downloads": 2,
    "comments": 4,
    "views": 1,
}

MIN_LIKES = 10
MIN_SHARES = 5
MIN_VIEWS = 100
MIN_ENGAGEMENT_SCORE = 50

COIN_ELIGIBILITY_THRESHOLDS: Dict[str, int] = {
    "minLikes": MIN_LIKES,
    "minShares": MIN_SHARES,
    "minViews": MIN_VIEWS,
    "minEngagementScore": MIN_ENGAGEMENT_SCORE,
}


def calculate_engagement_score(metrics: "EngagementMetrics") -> int:
    """
    Weighted sum of the five engagement counters.

    Args:
        metrics: Counters to score

    Returns:
        3*likes + 5*shares + 2*downloads + 4*comments + views
    """
    return sum(getattr(metrics, counter) * weight for counter, weight in ENGAGEMENT_WEIGHTS.items())


def is_eligible_for_coin(metrics: "EngagementMetrics") -> bool:
    """
    Check whether a meme's counters clear every coin threshold.

    All four conditions must hold; a high score does not compensate for an
    unmet counter floor.
    """
    return (
        metrics.likes >= MIN_LIKES
        and metrics.shares >= MIN_SHARES
        and metrics.views >= MIN_VIEWS
        and calculate_engagement_score(metrics) >= MIN_ENGAGEMENT_SCORE
    )
