"""Pydantic schemas for coin and preference endpoints."""

from typing import Literal, Optional

from pydantic import Field

from .memes import CamelSchema


class CoinResultRequest(CamelSchema):
    """
    Outcome reported by the wallet after signing a prepared deployment.

    Attributes:
        success: Whether the transaction went through
        transaction_hash: Deployment transaction
        contract_address: Deployed coin address
        chain_id: Network the coin was deployed on
        ipfs_hash: CID of the pinned metadata
        creator: Address that signed the deployment
        error: Failure reason
    """

    success: bool
    transaction_hash: Optional[str] = None
    contract_address: Optional[str] = None
    chain_id: Optional[int] = None
    ipfs_hash: Optional[str] = None
    creator: Optional[str] = None
    error: Optional[str] = None


class PreferencesUpdate(CamelSchema):
    """Partial preference update. Omitted fields keep their value."""

    default_chain: Optional[int] = Field(None, gt=0)
    auto_create_coins: Optional[bool] = None
    notifications_enabled: Optional[bool] = None
    theme: Optional[Literal["light", "dark"]] = None
