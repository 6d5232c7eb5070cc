"""Turning eligible memes into coins."""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from ..config.config import settings
from ..exceptions.base import ErrorCode, MemeCoinError
from ..exceptions.meme_specific import (
    CoinAlreadyCreatedError,
    CoinDeploymentError,
    CoinEligibilityError,
    InvalidCoinRequestError,
)
from ..models.coin import ADDRESS_PATTERN, CoinCreationRequest, CoinCreationResult, MemeCoin
from ..models.meme import CoinInfo, Meme
from ..utils.logging import bind_context, get_logger
from .chains import coin_viewer_url, default_currency, is_supported_chain
from .ipfs import ipfs_uri
from .meme_store import MemeStore

logger = get_logger(__name__)

_ADDRESS = re.compile(ADDRESS_PATTERN)
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

MAX_NAME_TEXT = 20
MAX_NAME = 50
MAX_SYMBOL = 8


class MemeUploader(Protocol):
    """Pins a meme image and its coin metadata, returning (image CID, metadata CID)."""

    async def upload_meme_for_coin(self, image_url: str, metadata: Mapping[str, Any]) -> Tuple[str, str]:
        ...


@dataclass(frozen=True)
class DeploymentParams:
    """Arguments for a coin deployment transaction."""

    name: str
    symbol: str
    uri: str
    chain_id: int
    payout_recipient: str
    currency: str
    platform_referrer: Optional[str] = None


@dataclass(frozen=True)
class DeploymentReceipt:
    transaction_hash: str
    contract_address: str


class CoinDeployer(Protocol):
    """Chain boundary: submits the deployment and waits for the receipt."""

    async def deploy(self, params: DeploymentParams) -> DeploymentReceipt:
        ...


@dataclass
class CoinDraft:
    """
    Everything a wallet needs to sign a deployment.

    ``uri`` and ``ipfs_hash`` are set once the metadata has been pinned.
    """

    meme_id: str
    name: str
    symbol: str
    chain_id: int
    currency: str
    payout_recipient: str
    image_url: str
    platform_referrer: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    uri: Optional[str] = None
    ipfs_hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "memeId": data["meme_id"],
            "name": data["name"],
            "symbol": data["symbol"],
            "chainId": data["chain_id"],
            "currency": data["currency"],
            "payoutRecipient": data["payout_recipient"],
            "platformReferrer": data["platform_referrer"],
            "imageUrl": data["image_url"],
            "metadata": data["metadata"],
            "uri": data["uri"],
            "ipfsHash": data["ipfs_hash"],
        }


def generate_coin_name_and_symbol(
    template_name: str,
    top_text: Optional[str] = None,
    bottom_text: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Derive a coin name and ticker symbol from a meme.

    Args:
        template_name: Template display name
        top_text: Top caption
        bottom_text: Bottom caption, used when there is no top caption

    Returns:
        Tuple of (name, symbol)
    """
    text = top_text or bottom_text or ""
    short_text = text[:MAX_NAME_TEXT] + "..." if len(text) > MAX_NAME_TEXT else text
    name = f"{template_name} - {short_text}" if short_text else template_name
    if len(name) > MAX_NAME:
        name = name[:MAX_NAME] + "..."

    template_symbol = _NON_ALNUM.sub("", template_name).upper()[:4]
    text_symbol = _NON_ALNUM.sub("", text).upper()[:3]
    symbol = f"{template_symbol}{text_symbol}" if text_symbol else f"{template_symbol}COIN"
    return name, symbol[:MAX_SYMBOL]


def build_coin_metadata(
    meme: Meme,
    creator: str,
    name: Optional[str] = None,
    symbol: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the coin metadata document for a meme, without the ``image`` field.

    Args:
        meme: Source meme
        creator: Address credited as creator
        name: Coin name, generated when omitted
        symbol: Coin symbol, generated when omitted

    Returns:
        Metadata document ready to be pinned
    """
    generated_name, generated_symbol = generate_coin_name_and_symbol(
        meme.template_name, meme.top_text, meme.bottom_text
    )
    metrics = meme.metrics

    description_parts = [f'A valuable coin created from the popular "{meme.template_name}" meme.']
    if meme.top_text:
        description_parts.append(f'Top: "{meme.top_text}"')
    if meme.bottom_text:
        description_parts.append(f'Bottom: "{meme.bottom_text}"')

    return {
        "name": name or generated_name,
        "symbol": symbol or generated_symbol,
        "description": " ".join(description_parts),
        "external_url": f"{settings.app_public_url.rstrip('/')}/meme/{meme.id}",
        "attributes": [
            {"trait_type": "Template", "value": meme.template_name},
            {"trait_type": "Category", "value": meme.category or "General"},
            {"trait_type": "Language", "value": meme.language or "en"},
            {"trait_type": "Creator", "value": creator},
            {"trait_type": "Popularity Score", "value": metrics.likes * 3 + metrics.shares * 5 + metrics.views},
        ],
        "meme": {
            "templateId": meme.template_id,
            "templateName": meme.template_name,
            "topText": meme.top_text,
            "bottomText": meme.bottom_text,
            "originalPrompt": meme.prompt,
            "category": meme.category,
            "language": meme.language or "en",
        },
        "popularity": metrics.to_dict(),
    }


class CoinMintingService:
    """
    Checks preconditions, builds metadata and records minted coins.

    Precondition failures raise before any IPFS or chain call. Failures of
    those external calls are returned as an unsuccessful
    :class:`CoinCreationResult`.
    """

    def __init__(
        self,
        store: MemeStore,
        uploader: Optional[MemeUploader] = None,
        deployer: Optional[CoinDeployer] = None,
    ) -> None:
        self.store = store
        self.uploader = uploader
        self.deployer = deployer

    def check_preconditions(self, meme_id: str) -> Meme:
        """
        Return the meme if a coin may be minted from it.

        Raises:
            MemeNotFoundError: If the meme does not exist
            CoinAlreadyCreatedError: If the meme already has a coin
            CoinEligibilityError: If the meme is below the popularity thresholds
        """
        meme = self.store.require(meme_id)
        if meme.coin_created:
            raise CoinAlreadyCreatedError(meme_id, coin_address=meme.coin_address)
        if not meme.eligible:
            raise CoinEligibilityError(meme_id, score=meme.score)
        return meme

    def _resolve_chain(self, chain_id: Optional[int]) -> int:
        if chain_id is None:
            chain_id = self.store.preferences.default_chain or settings.default_chain_id
        if not is_supported_chain(chain_id):
            raise InvalidCoinRequestError(f"Unsupported chain: {chain_id}", field="chainId")
        return chain_id

    @staticmethod
    def _validate_addresses(request: CoinCreationRequest) -> None:
        if not _ADDRESS.match(request.payout_recipient):
            raise InvalidCoinRequestError("Invalid payout recipient address", field="payoutRecipient")
        if request.platform_referrer and not _ADDRESS.match(request.platform_referrer):
            raise InvalidCoinRequestError("Invalid platform referrer address", field="platformReferrer")

    def prepare_coin(self, request: CoinCreationRequest, creator: Optional[str] = None) -> CoinDraft:
        """
        Validate a request and build the deployment draft.

        Args:
            request: Coin request from the caller
            creator: Address credited in the metadata, defaults to the payout recipient

        Returns:
            CoinDraft with name, symbol, network and metadata

        Raises:
            MemeNotFoundError, CoinAlreadyCreatedError, CoinEligibilityError,
            InvalidCoinRequestError
        """
        meme = self.check_preconditions(request.meme_id)
        self._validate_addresses(request)
        chain_id = self._resolve_chain(request.chain_id)

        name = (request.name or "").strip() or None
        symbol = (request.symbol or "").strip() or None
        metadata = build_coin_metadata(meme, creator or request.payout_recipient, name=name, symbol=symbol)

        return CoinDraft(
            meme_id=meme.id,
            name=metadata["name"],
            symbol=metadata["symbol"],
            chain_id=chain_id,
            currency=default_currency(chain_id),
            payout_recipient=request.payout_recipient,
            platform_referrer=request.platform_referrer,
            image_url=meme.image_url,
            metadata=metadata,
        )

    async def pin_metadata(self, draft: CoinDraft) -> CoinDraft:
        """
        Pin the meme image and the draft's metadata, filling ``uri`` and ``ipfs_hash``.

        Raises:
            CoinDeploymentError: If no uploader is configured or pinning fails
        """
        if self.uploader is None:
            raise CoinDeploymentError(
                "IPFS uploads are not configured", stage="ipfs", code=ErrorCode.IPFS_UPLOAD_ERROR
            )
        try:
            image_cid, metadata_cid = await self.uploader.upload_meme_for_coin(draft.image_url, draft.metadata)
        except MemeCoinError:
            raise
        except Exception as e:
            raise CoinDeploymentError(
                f"Failed to pin coin metadata: {e}",
                stage="ipfs",
                code=ErrorCode.IPFS_UPLOAD_ERROR,
                original_error=e,
            ) from e

        draft.metadata = {**draft.metadata, "image": ipfs_uri(image_cid)}
        draft.ipfs_hash = metadata_cid
        draft.uri = ipfs_uri(metadata_cid)
        logger.info("coin_metadata_pinned", meme_id=draft.meme_id, ipfs_hash=metadata_cid)
        return draft

    async def prepare_pinned_coin(self, request: CoinCreationRequest, creator: Optional[str] = None) -> CoinDraft:
        """
        Build a draft a wallet can deploy directly.

        The metadata is pinned when an uploader is configured; otherwise the
        draft is returned without ``uri``.

        Raises:
            MemeNotFoundError, CoinAlreadyCreatedError, CoinEligibilityError,
            InvalidCoinRequestError: Before any external call is made
            CoinDeploymentError: If pinning fails
        """
        draft = self.prepare_coin(request, creator=creator)
        if self.uploader is None:
            logger.warning("coin_metadata_not_pinned", meme_id=draft.meme_id, reason="no uploader")
            return draft
        return await self.pin_metadata(draft)

    async def create_coin(self, request: CoinCreationRequest, creator: Optional[str] = None) -> CoinCreationResult:
        """
        Pin metadata, deploy the coin and record it.

        Raises:
            MemeNotFoundError, CoinAlreadyCreatedError, CoinEligibilityError,
            InvalidCoinRequestError: Before any external call is made
        """
        draft = self.prepare_coin(request, creator=creator)
        if self.uploader is None or self.deployer is None:
            return CoinCreationResult(success=False, error="Coin deployment is not configured")

        with bind_context(meme_id=draft.meme_id, chain_id=draft.chain_id):
            try:
                await self.pin_metadata(draft)
                receipt = await self.deployer.deploy(
                    DeploymentParams(
                        name=draft.name,
                        symbol=draft.symbol,
                        uri=draft.uri,
                        chain_id=draft.chain_id,
                        payout_recipient=draft.payout_recipient,
                        platform_referrer=draft.platform_referrer,
                        currency=draft.currency,
                    )
                )
            except MemeCoinError as e:
                logger.error("coin_creation_failed", error=e.message)
                return CoinCreationResult(success=False, error=e.message, chain_id=draft.chain_id)
            except Exception as e:
                logger.error("coin_creation_failed", error=str(e), exc_info=True)
                return CoinCreationResult(
                    success=False, error=str(e) or "Failed to create coin", chain_id=draft.chain_id
                )

            result = CoinCreationResult(
                success=True,
                transaction_hash=receipt.transaction_hash,
                contract_address=receipt.contract_address,
                viewer_url=coin_viewer_url(receipt.contract_address, draft.chain_id),
                chain_id=draft.chain_id,
                ipfs_hash=draft.ipfs_hash,
            )
            self.record_coin_result(
                draft.meme_id,
                result,
                metadata=draft.metadata,
                creator=creator or request.payout_recipient,
            )
        return result

    def record_coin_result(
        self,
        meme_id: str,
        result: CoinCreationResult,
        metadata: Optional[Dict[str, Any]] = None,
        creator: Optional[str] = None,
    ) -> Optional[MemeCoin]:
        """
        Store the outcome of a deployment, including ones signed by a wallet.

        A successful result is only accepted for a meme that is still
        eligible and has no coin yet.

        Returns:
            The stored coin record, or None for a failed result

        Raises:
            MemeNotFoundError: If the meme does not exist
            CoinAlreadyCreatedError: If the meme already has a coin
            CoinEligibilityError: If the meme is below the popularity thresholds
            InvalidCoinRequestError: If a successful result has no contract address
        """
        meme = self.store.require(meme_id)
        if not result.success:
            logger.warning("coin_creation_reported_failure", meme_id=meme_id, error=result.error)
            return None
        self.check_preconditions(meme_id)
        if not result.contract_address or not _ADDRESS.match(result.contract_address):
            raise InvalidCoinRequestError("Missing or invalid contract address", field="contractAddress")

        chain_id = result.chain_id or settings.default_chain_id
        viewer_url = result.viewer_url or coin_viewer_url(result.contract_address, chain_id)
        coin_info = CoinInfo(
            address=result.contract_address,
            chain_id=chain_id,
            transaction_hash=result.transaction_hash,
            viewer_url=viewer_url,
        )
        self.store.mutate(meme_id, lambda m: m.mark_coin_created(coin_info))

        record = MemeCoin(
            meme_id=meme_id,
            contract_address=result.contract_address,
            chain_id=chain_id,
            metadata=metadata if metadata is not None else build_coin_metadata(meme, creator or ""),
            ipfs_hash=result.ipfs_hash,
            creator=creator,
            transaction_hash=result.transaction_hash,
            viewer_url=viewer_url,
        )
        self.store.add_coin(record)
        logger.info(
            "coin_recorded",
            meme_id=meme_id,
            contract_address=result.contract_address,
            chain_id=chain_id,
        )
        return record
