"""In-memory meme, coin and preference state with durable snapshots."""

import dataclasses
import threading
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from ..config.config import settings
from ..exceptions.meme_specific import MemeNotFoundError
from ..models.coin import MemeCoin, UserPreferences
from ..models.meme import EngagementEvent, Meme, utcnow
from ..utils.logging import get_logger
from .persistence import StatePersistence

logger = get_logger(__name__)

TIMEFRAMES: Dict[str, timedelta] = {
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
}

UNCATEGORIZED = "Uncategorized"

UPDATABLE_FIELDS = frozenset(
    f.name for f in dataclasses.fields(Meme) if f.init and f.name not in ("id", "metrics")
)


class MemeStore:
    """
    Ordered collection of memes for a session.

    All mutations go through this class, run under one lock, refresh the
    meme's eligibility and write a snapshot through ``persistence``.
    Engagement history is kept in memory only.
    """

    def __init__(self, persistence: Optional[StatePersistence] = None, autoload: bool = True) -> None:
        self.persistence = persistence
        self._lock = threading.RLock()
        self._memes: Dict[str, Meme] = {}
        self._history: Dict[str, List[EngagementEvent]] = {}
        self._coins: List[MemeCoin] = []
        self._preferences = UserPreferences()
        if autoload and persistence is not None:
            self.load()

    # Persistence

    def load(self) -> None:
        """Replace the in-memory state with what is stored."""
        if self.persistence is None:
            return
        with self._lock:
            memes = self.persistence.load_memes()
            self._memes = {meme.id: meme for meme in memes}
            self._history = {meme.id: [] for meme in memes}
            self._coins = self.persistence.load_coins()
            self._preferences = self.persistence.load_preferences()
        logger.info("state_loaded", memes=len(self._memes), coins=len(self._coins))

    def _save_memes(self) -> None:
        if self.persistence is not None:
            self.persistence.save_memes(list(self._memes.values()))

    def _save_coins(self) -> None:
        if self.persistence is not None:
            self.persistence.save_coins(self._coins)

    # Memes

    def __len__(self) -> int:
        return len(self._memes)

    def __contains__(self, meme_id: object) -> bool:
        return meme_id in self._memes

    def add(self, meme: Meme) -> Meme:
        with self._lock:
            meme.refresh_eligibility()
            self._memes[meme.id] = meme
            self._history.setdefault(meme.id, [])
            self._save_memes()
        logger.info("meme_added", meme_id=meme.id, template_id=meme.template_id)
        return meme

    def get(self, meme_id: str) -> Optional[Meme]:
        return self._memes.get(meme_id)

    def require(self, meme_id: str) -> Meme:
        """
        Look up a meme that must exist.

        Raises:
            MemeNotFoundError: If the id is unknown
        """
        meme = self._memes.get(meme_id)
        if meme is None:
            raise MemeNotFoundError(meme_id)
        return meme

    def all(self) -> List[Meme]:
        """Memes in insertion order."""
        return list(self._memes.values())

    def mutate(self, meme_id: str, change: Callable[[Meme], None]) -> Optional[Meme]:
        """
        Apply ``change`` to a meme, then refresh eligibility and persist.

        Args:
            meme_id: Meme to change
            change: Callback mutating the meme in place

        Returns:
            The changed meme, or None if the id is unknown
        """
        with self._lock:
            meme = self._memes.get(meme_id)
            if meme is None:
                return None
            change(meme)
            meme.refresh_eligibility()
            self._save_memes()
            return meme

    def update(self, meme_id: str, **fields: Any) -> Optional[Meme]:
        """
        Set plain fields such as captions or category on a meme.

        Raises:
            ValueError: On a derived, private or unknown field, or on ``id``/``metrics``
        """
        unknown = [name for name in fields if name not in UPDATABLE_FIELDS]
        if unknown:
            raise ValueError(f"Field cannot be updated: {unknown[0]}")

        def _apply(meme: Meme) -> None:
            for name, value in fields.items():
                setattr(meme, name, value)

        return self.mutate(meme_id, _apply)

    def remove(self, meme_id: str) -> bool:
        with self._lock:
            if self._memes.pop(meme_id, None) is None:
                return False
            self._history.pop(meme_id, None)
            self._save_memes()
        logger.info("meme_removed", meme_id=meme_id)
        return True

    # History

    def record_event(self, meme_id: str, action: str, metadata: Optional[Dict[str, Any]] = None) -> Optional[EngagementEvent]:
        with self._lock:
            if meme_id not in self._memes:
                return None
            event = EngagementEvent(action=action, timestamp=utcnow(), metadata=dict(metadata or {}))
            self._history.setdefault(meme_id, []).append(event)
            return event

    def history(self, meme_id: str) -> List[EngagementEvent]:
        return list(self._history.get(meme_id, []))

    # Coins

    def add_coin(self, coin: MemeCoin) -> MemeCoin:
        with self._lock:
            self._coins.append(coin)
            self._save_coins()
        return coin

    def coins(self) -> List[MemeCoin]:
        return list(self._coins)

    def get_coin_by_meme_id(self, meme_id: str) -> Optional[MemeCoin]:
        return next((coin for coin in self._coins if coin.meme_id == meme_id), None)

    # Preferences

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    def update_preferences(self, **changes: Any) -> UserPreferences:
        with self._lock:
            self._preferences = UserPreferences.model_validate(
                {**self._preferences.model_dump(), **changes}
            )
            if self.persistence is not None:
                self.persistence.save_preferences(self._preferences)
            return self._preferences

    # Analytics

    def total_engagement(self) -> int:
        return sum(meme.score for meme in self._memes.values())

    def top_memes(self, limit: Optional[int] = None) -> List[Meme]:
        """Memes by descending score; equal scores keep insertion order."""
        limit = settings.top_memes_limit if limit is None else limit
        return sorted(self._memes.values(), key=lambda m: -m.score)[:limit]

    def eligible_memes(self) -> List[Meme]:
        return [m for m in self._memes.values() if m.eligible and not m.coin_created]

    def memes_by_category(self, category: str) -> List[Meme]:
        wanted = category.lower()
        return [m for m in self._memes.values() if m.category and m.category.lower() == wanted]

    def trending_memes(
        self,
        timeframe: str = "day",
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Meme]:
        """
        Memes with an interaction inside ``timeframe``, weighted by recency.

        Args:
            timeframe: ``hour``, ``day`` or ``week``
            now: Reference time, defaults to now
            limit: Maximum results

        Raises:
            ValueError: On an unknown timeframe
        """
        if timeframe not in TIMEFRAMES:
            raise ValueError(f"Unknown timeframe: {timeframe}")
        now = now or utcnow()
        limit = settings.trending_limit if limit is None else limit
        cutoff = now - TIMEFRAMES[timeframe]
        now_ts = now.timestamp()

        recent = [m for m in self._memes.values() if m.metrics.last_interaction > cutoff]
        recent.sort(key=lambda m: -(m.score * (m.metrics.last_interaction.timestamp() / now_ts)))
        return recent[:limit]

    def engagement_trends(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Aggregate counts plus the last 24 hours of engagement history."""
        now = now or utcnow()
        memes = list(self._memes.values())
        total = self.total_engagement()
        categories = Counter(m.category or UNCATEGORIZED for m in memes)

        yesterday = now - timedelta(days=1)
        recent_activity = []
        for meme_id, events in self._history.items():
            recent = [e for e in events if e.timestamp > yesterday]
            if recent:
                recent_activity.append(
                    {
                        "memeId": meme_id,
                        "actions": len(recent),
                        "lastAction": recent[-1].to_dict(),
                    }
                )

        return {
            "totalMemes": len(memes),
            "totalEngagement": total,
            "averageEngagement": total / len(memes) if memes else 0,
            "eligibleMemes": len(self.eligible_memes()),
            "coinCreatedMemes": sum(1 for m in memes if m.coin_created),
            "categories": dict(categories),
            "recentActivity": recent_activity,
        }

    # Whole-state operations

    def clear(self) -> None:
        with self._lock:
            self._memes.clear()
            self._history.clear()
            self._coins.clear()
            self._preferences = UserPreferences()
            if self.persistence is not None:
                self.persistence.clear_all()

    def export_data(self) -> Dict[str, Any]:
        with self._lock:
            self._save_memes()
            self._save_coins()
            if self.persistence is None:
                return {
                    "memes": [m.to_dict() for m in self._memes.values()],
                    "coins": [c.dump() for c in self._coins],
                    "preferences": self._preferences.dump(),
                    "exportDate": utcnow().isoformat(),
                }
            return self.persistence.export_data()

    def import_data(self, data: Any) -> bool:
        if self.persistence is None:
            return False
        with self._lock:
            ok = self.persistence.import_data(data)
            if ok:
                self.load()
            return ok
