"""Engagement tracking: counter increments, history and simulated viral growth."""

import math
import random
from typing import Any, Dict, List, Optional

from ..models.meme import EngagementEvent, Meme
from ..utils.logging import get_logger
from .meme_store import MemeStore

logger = get_logger(__name__)

# Public action name to the counter it increments.
ACTION_COUNTERS: Dict[str, str] = {
    "view": "views",
    "like": "likes",
    "share": "shares",
    "download": "downloads",
    "comment": "comments",
}

VIRAL_GROWTH_ACTION = "viral_growth"


class EngagementTracker:
    """Mutates meme engagement through the store's single mutation entry point."""

    def __init__(self, store: MemeStore, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.rng = rng or random.Random()

    def increment(
        self,
        meme_id: str,
        action: str,
        amount: int = 1,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[Meme]:
        """
        Bump the counter behind ``action`` and log a history entry.

        Args:
            meme_id: Meme to update
            action: One of ``view``, ``like``, ``share``, ``download``, ``comment``
            amount: Non-negative increment
            metadata: Extra history data

        Returns:
            The updated meme, or None if the id is unknown

        Raises:
            ValueError: On an unknown action or a negative amount
        """
        counter = ACTION_COUNTERS.get(action)
        if counter is None:
            raise ValueError(f"Unknown engagement action: {action}")
        if amount < 0:
            raise ValueError("Engagement amount must not be negative")

        meme = self.store.mutate(meme_id, lambda m: m.metrics.apply({counter: amount}))
        if meme is None:
            logger.warning("engagement_for_unknown_meme", meme_id=meme_id, action=action)
            return None

        self.store.record_event(meme_id, action, {"amount": amount, **(metadata or {})})
        logger.debug("engagement_tracked", meme_id=meme_id, action=action, amount=amount, eligible=meme.eligible)
        return meme

    def increment_views(self, meme_id: str, amount: int = 1) -> Optional[Meme]:
        return self.increment(meme_id, "view", amount)

    def increment_likes(self, meme_id: str, amount: int = 1) -> Optional[Meme]:
        return self.increment(meme_id, "like", amount)

    def increment_shares(self, meme_id: str, platform: Optional[str] = None, amount: int = 1) -> Optional[Meme]:
        return self.increment(meme_id, "share", amount, {"platform": platform or "unknown"})

    def increment_downloads(self, meme_id: str, amount: int = 1) -> Optional[Meme]:
        return self.increment(meme_id, "download", amount)

    def increment_comments(self, meme_id: str, amount: int = 1) -> Optional[Meme]:
        return self.increment(meme_id, "comment", amount)

    def track_engagement(
        self, meme_id: str, action: str, metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[EngagementEvent]:
        """Record a free-form history entry without touching any counter."""
        return self.store.record_event(meme_id, action, metadata)

    def get_engagement_history(self, meme_id: str) -> List[EngagementEvent]:
        return self.store.history(meme_id)

    def viral_growth_deltas(self) -> Dict[str, Any]:
        """
        Draw one set of viral growth deltas from ``rng``.

        Returns:
            Mapping with the ``multiplier`` in [2, 7) and per-counter ``deltas``
        """
        rng = self.rng
        multiplier = rng.random() * 5 + 2
        base_views = math.floor(rng.random() * 1000) + 500
        base_likes = math.floor(base_views * 0.1 * rng.random())
        base_shares = math.floor(base_likes * 0.3 * rng.random())
        base_downloads = math.floor(base_likes * 0.5 * rng.random())
        base_comments = math.floor(base_likes * 0.2 * rng.random())
        bases = {
            "views": base_views,
            "likes": base_likes,
            "shares": base_shares,
            "downloads": base_downloads,
            "comments": base_comments,
        }
        return {
            "multiplier": multiplier,
            "deltas": {name: math.floor(base * multiplier) for name, base in bases.items()},
        }

    def simulate_viral_growth(self, meme_id: str) -> Optional[Meme]:
        """
        Apply one random burst of engagement to every counter at once.

        Returns:
            The updated meme, or None if the id is unknown
        """
        if meme_id not in self.store:
            return None
        growth = self.viral_growth_deltas()
        meme = self.store.mutate(meme_id, lambda m: m.metrics.apply(growth["deltas"]))
        if meme is None:
            return None
        self.store.record_event(meme_id, VIRAL_GROWTH_ACTION, {"multiplier": growth["multiplier"]})
        logger.info(
            "viral_growth_simulated",
            meme_id=meme_id,
            multiplier=round(growth["multiplier"], 3),
            score=meme.score,
            eligible=meme.eligible,
        )
        return meme
