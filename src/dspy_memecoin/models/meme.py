"""Meme domain model: engagement counters and the meme lifecycle."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..exceptions.meme_specific import CoinAlreadyCreatedError
from ..services.eligibility import calculate_engagement_score, is_eligible_for_coin

COUNTER_NAMES = ("views", "likes", "shares", "downloads", "comments")

# Stands in for the address of coins recorded before addresses were stored.
UNKNOWN_COIN_ADDRESS = "unknown"


def utcnow() -> datetime:
    """Timezone-aware current time; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any, default: Optional[datetime] = None) -> datetime:
    """Rebuild a datetime from its ISO form, assuming UTC when no offset was stored."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        return default if default is not None else utcnow()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class MemeState(str, Enum):
    """Lifecycle states. Transitions only move forward."""

    CREATED = "created"
    ENGAGED = "engaged"
    ELIGIBLE = "eligible"
    COIN_CREATED = "coin_created"


@dataclass
class EngagementMetrics:
    """Monotonic engagement counters for a single meme."""

    views: int = 0
    likes: int = 0
    shares: int = 0
    downloads: int = 0
    comments: int = 0
    created_at: datetime = field(default_factory=utcnow)
    last_interaction: datetime = field(default_factory=utcnow)

    def apply(self, deltas: Mapping[str, int], at: Optional[datetime] = None) -> None:
        """
        Add every delta in one step and stamp the interaction time.

        Args:
            deltas: Counter name to non-negative increment
            at: Interaction time, defaults to now

        Raises:
            ValueError: On an unknown counter or a negative delta
        """
        for name, amount in deltas.items():
            if name not in COUNTER_NAMES:
                raise ValueError(f"Unknown engagement counter: {name}")
            if amount < 0:
                raise ValueError(f"Engagement counters never decrease (got {name}={amount})")
        for name, amount in deltas.items():
            setattr(self, name, getattr(self, name) + int(amount))
        self.last_interaction = at or utcnow()

    def has_engagement(self) -> bool:
        return any(getattr(self, name) > 0 for name in COUNTER_NAMES)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: getattr(self, name) for name in COUNTER_NAMES}
        data["createdAt"] = self.created_at.isoformat()
        data["lastInteraction"] = self.last_interaction.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngagementMetrics":
        if not isinstance(data, Mapping):
            raise TypeError(f"Engagement metrics must be a mapping, got {type(data).__name__}")
        created_at = parse_timestamp(data.get("createdAt"))
        return cls(
            **{name: max(0, int(data.get(name, 0) or 0)) for name in COUNTER_NAMES},
            created_at=created_at,
            last_interaction=parse_timestamp(data.get("lastInteraction"), default=created_at),
        )


@dataclass(frozen=True)
class CoinInfo:
    """Payload of the COIN_CREATED state."""

    address: str
    chain_id: int
    transaction_hash: Optional[str] = None
    viewer_url: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "chainId": self.chain_id,
            "transactionHash": self.transaction_hash,
            "viewerUrl": self.viewer_url,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CoinInfo":
        if not isinstance(data, Mapping):
            raise TypeError(f"Coin payload must be a mapping, got {type(data).__name__}")
        return cls(
            address=data["address"],
            chain_id=int(data["chainId"]),
            transaction_hash=data.get("transactionHash"),
            viewer_url=data.get("viewerUrl"),
            created_at=parse_timestamp(data.get("createdAt")),
        )


@dataclass(frozen=True)
class EngagementEvent:
    """One entry in a meme's engagement history. Used for trend reporting only."""

    action: str
    timestamp: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


def new_meme_id() -> str:
    return f"meme-{uuid.uuid4().hex}"


@dataclass
class Meme:
    """
    A generated meme and its lifecycle.

    ``eligible`` is derived from ``metrics`` and only changes through
    :meth:`refresh_eligibility`. The coin payload is written once through
    :meth:`mark_coin_created` and can never be cleared.
    """

    template_id: str
    template_name: str
    image_url: str
    prompt: str
    top_text: Optional[str] = None
    bottom_text: Optional[str] = None
    category: Optional[str] = None
    language: str = "en"
    id: str = field(default_factory=new_meme_id)
    created_at: datetime = field(default_factory=utcnow)
    metrics: EngagementMetrics = field(default_factory=EngagementMetrics)
    _eligible: bool = field(default=False, init=False, repr=False)
    _coin: Optional[CoinInfo] = field(default=None, init=False, repr=False)

    @property
    def eligible(self) -> bool:
        return self._eligible

    @property
    def coin(self) -> Optional[CoinInfo]:
        return self._coin

    @property
    def coin_created(self) -> bool:
        return self._coin is not None

    @property
    def coin_address(self) -> Optional[str]:
        return self._coin.address if self._coin else None

    @property
    def state(self) -> MemeState:
        if self._coin is not None:
            return MemeState.COIN_CREATED
        if self._eligible:
            return MemeState.ELIGIBLE
        if self.metrics.has_engagement():
            return MemeState.ENGAGED
        return MemeState.CREATED

    @property
    def score(self) -> int:
        return calculate_engagement_score(self.metrics)

    def refresh_eligibility(self) -> bool:
        """Recompute ``eligible`` from the current counters and return it."""
        self._eligible = is_eligible_for_coin(self.metrics)
        return self._eligible

    def mark_coin_created(self, coin: CoinInfo) -> None:
        """
        Latch the meme into COIN_CREATED.

        Raises:
            CoinAlreadyCreatedError: If a coin was already recorded
        """
        if self._coin is not None:
            raise CoinAlreadyCreatedError(self.id, coin_address=self._coin.address)
        self._coin = coin

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys of the persisted state format."""
        return {
            "id": self.id,
            "templateId": self.template_id,
            "templateName": self.template_name,
            "imageUrl": self.image_url,
            "topText": self.top_text,
            "bottomText": self.bottom_text,
            "prompt": self.prompt,
            "category": self.category,
            "language": self.language,
            "createdAt": self.created_at.isoformat(),
            "popularity": self.metrics.to_dict(),
            "isEligibleForCoin": self._eligible,
            "coinCreated": self.coin_created,
            "coinAddress": self.coin_address,
            "coin": self._coin.to_dict() if self._coin else None,
            "state": self.state.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Meme":
        """
        Rebuild a meme from :meth:`to_dict` output, recomputing derived fields.

        Raises:
            TypeError: If the entry or its nested payloads are not mappings
            KeyError: If the id or template id is missing
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Meme entry must be a mapping, got {type(data).__name__}")
        created_at = parse_timestamp(data.get("createdAt"))
        popularity = data.get("popularity")
        metrics = (
            EngagementMetrics.from_dict(popularity)
            if popularity
            else EngagementMetrics(created_at=created_at, last_interaction=created_at)
        )
        meme = cls(
            id=data["id"],
            template_id=data["templateId"],
            template_name=data.get("templateName", data["templateId"]),
            image_url=data.get("imageUrl", ""),
            prompt=data.get("prompt", ""),
            top_text=data.get("topText"),
            bottom_text=data.get("bottomText"),
            category=data.get("category"),
            language=data.get("language") or "en",
            created_at=created_at,
            metrics=metrics,
        )
        meme.refresh_eligibility()
        coin = data.get("coin")
        if coin:
            meme.mark_coin_created(CoinInfo.from_dict(coin))
        elif data.get("coinCreated"):
            address = data.get("coinAddress") or UNKNOWN_COIN_ADDRESS
            meme.mark_coin_created(CoinInfo(address=address, chain_id=0))
        return meme
