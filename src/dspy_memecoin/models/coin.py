"""Coin records, coin request/result types and user preferences."""

from datetime import datetime
from typing import Any, Dict, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config.config import settings
from .meme import utcnow

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"


class CamelModel(BaseModel):
    """Base model that reads and writes the camelCase keys of the persisted state."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MemeCoin(CamelModel):
    """
    A deployed meme coin.

    Attributes:
        id: Unique record id
        meme_id: The meme the coin references
        contract_address: Deployed ERC-20 address
        chain_id: Network the coin lives on
        metadata: Metadata document pinned to IPFS
        ipfs_hash: CID of the metadata document
        creator: Address that paid for deployment
        transaction_hash: Deployment transaction
        viewer_url: Network-specific page for the coin
    """

    id: str = Field(default_factory=lambda: f"coin-{uuid4().hex}")
    meme_id: str
    contract_address: str
    chain_id: int
    metadata: Dict[str, Any] = Field(default_factory=dict)
    ipfs_hash: Optional[str] = None
    creator: Optional[str] = None
    transaction_hash: Optional[str] = None
    viewer_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class CoinCreationRequest(CamelModel):
    """Caller input for minting a coin from a meme."""

    meme_id: str
    name: Optional[str] = Field(None, max_length=64)
    symbol: Optional[str] = Field(None, max_length=11)
    payout_recipient: str
    platform_referrer: Optional[str] = None
    chain_id: Optional[int] = None


class CoinCreationResult(CamelModel):
    """Outcome of a minting attempt. Failures carry a reason string, never an exception."""

    success: bool
    transaction_hash: Optional[str] = None
    contract_address: Optional[str] = None
    viewer_url: Optional[str] = None
    chain_id: Optional[int] = None
    ipfs_hash: Optional[str] = None
    error: Optional[str] = None


class UserPreferences(CamelModel):
    """Per-installation preferences."""

    default_chain: int = Field(default_factory=lambda: settings.default_chain_id)
    auto_create_coins: bool = False
    notifications_enabled: bool = True
    theme: Literal["light", "dark"] = Field(default_factory=lambda: settings.default_theme)
