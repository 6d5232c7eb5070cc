"""Unit tests for coin minting."""

from unittest.mock import AsyncMock

import pytest

from dspy_memecoin.exceptions import (
    CoinAlreadyCreatedError,
    CoinDeploymentError,
    CoinEligibilityError,
    InvalidCoinRequestError,
    MemeNotFoundError,
)
from dspy_memecoin.models.coin import CoinCreationRequest, CoinCreationResult
from dspy_memecoin.models.meme import Meme
from dspy_memecoin.services.chains import coin_viewer_url, default_currency, is_supported_chain
from dspy_memecoin.services.coin_minting import (
    CoinMintingService,
    DeploymentReceipt,
    build_coin_metadata,
    generate_coin_name_and_symbol,
)
from dspy_memecoin.services.meme_store import MemeStore


PAYOUT = "0x" + "1" * 40
CONTRACT = "0x" + "2" * 40


@pytest.fixture
def uploader() -> AsyncMock:
    mock = AsyncMock()
    mock.upload_meme_for_coin.return_value = ("QmImage", "QmMetadata")
    return mock


@pytest.fixture
def deployer() -> AsyncMock:
    mock = AsyncMock()
    mock.deploy.return_value = DeploymentReceipt(transaction_hash="0xabc", contract_address=CONTRACT)
    return mock


@pytest.fixture
def minting(store: MemeStore, uploader: AsyncMock, deployer: AsyncMock) -> CoinMintingService:
    return CoinMintingService(store, uploader=uploader, deployer=deployer)


def request_for(meme_id: str, **overrides) -> CoinCreationRequest:
    return CoinCreationRequest(meme_id=meme_id, payout_recipient=PAYOUT, **overrides)


def test_name_and_symbol_from_captions() -> None:
    name, symbol = generate_coin_name_and_symbol("Drake Hotline Bling", "The old way", "tabs")

    assert name == "Drake Hotline Bling - The old way"
    assert symbol == "DRAKTHE"


def test_name_and_symbol_truncation() -> None:
    name, symbol = generate_coin_name_and_symbol("Drake", None, "a caption that is much longer than twenty")

    assert name == "Drake - a caption that is mu..."
    assert symbol == "DRAKACA"


def test_name_and_symbol_without_text() -> None:
    assert generate_coin_name_and_symbol("Doge") == ("Doge", "DOGECOIN")


def test_long_name_is_capped() -> None:
    name, _ = generate_coin_name_and_symbol("X" * 60, "text")

    assert name == "X" * 50 + "..."


def test_metadata_fields(make_meme) -> None:
    meme = make_meme({"views": 100, "likes": 10, "shares": 5, "comments": 3}, category=None, language="en")

    metadata = build_coin_metadata(meme, creator=PAYOUT)

    attributes = {a["trait_type"]: a["value"] for a in metadata["attributes"]}
    assert attributes["Category"] == "General"
    assert attributes["Creator"] == PAYOUT
    assert attributes["Popularity Score"] == 10 * 3 + 5 * 5 + 100
    assert metadata["external_url"].endswith(f"/meme/{meme.id}")
    assert metadata["meme"]["originalPrompt"] == meme.prompt
    assert metadata["popularity"]["comments"] == 3
    assert 'Top: "The old way"' in metadata["description"]


def test_chain_helpers() -> None:
    assert coin_viewer_url(CONTRACT, 8453) == f"https://zora.co/coin/base:{CONTRACT}"
    assert coin_viewer_url(CONTRACT, 84532) == f"https://testnet.zora.co/coin/bsep:{CONTRACT}"
    assert coin_viewer_url(CONTRACT, 10) == f"https://testnet.zora.co/coin/10:{CONTRACT}"
    assert default_currency(8453) == "ZORA"
    assert default_currency(84532) == "ETH"
    assert is_supported_chain(84532) and not is_supported_chain(1)


async def test_ineligible_meme_rejected_before_external_calls(
    minting: CoinMintingService, store: MemeStore, make_meme, uploader: AsyncMock, deployer: AsyncMock
) -> None:
    """Test that no IPFS or chain call is made for an ineligible meme."""
    meme = store.add(make_meme({"likes": 20, "views": 1000}))

    with pytest.raises(CoinEligibilityError):
        await minting.create_coin(request_for(meme.id))

    uploader.upload_meme_for_coin.assert_not_called()
    deployer.deploy.assert_not_called()


async def test_unknown_meme_rejected(minting: CoinMintingService, uploader: AsyncMock) -> None:
    with pytest.raises(MemeNotFoundError):
        await minting.create_coin(request_for("meme-missing"))
    uploader.upload_meme_for_coin.assert_not_called()


async def test_bad_payout_address_rejected(
    minting: CoinMintingService, eligible_meme: Meme, uploader: AsyncMock
) -> None:
    with pytest.raises(InvalidCoinRequestError):
        await minting.create_coin(CoinCreationRequest(meme_id=eligible_meme.id, payout_recipient="0x123"))
    uploader.upload_meme_for_coin.assert_not_called()


async def test_unsupported_chain_rejected(minting: CoinMintingService, eligible_meme: Meme) -> None:
    with pytest.raises(InvalidCoinRequestError):
        await minting.create_coin(request_for(eligible_meme.id, chain_id=1))


async def test_successful_creation_latches_meme(
    minting: CoinMintingService, store: MemeStore, eligible_meme: Meme, deployer: AsyncMock
) -> None:
    """Test the full flow: pin, deploy, latch and record."""
    result = await minting.create_coin(request_for(eligible_meme.id, chain_id=84532))

    assert result.success is True
    assert result.contract_address == CONTRACT
    assert result.viewer_url == f"https://testnet.zora.co/coin/bsep:{CONTRACT}"
    assert result.ipfs_hash == "QmMetadata"
    params = deployer.deploy.await_args.args[0]
    assert params.uri == "ipfs://QmMetadata"
    assert params.currency == "ETH"
    assert eligible_meme.coin_created
    assert store.eligible_memes() == []
    coin = store.get_coin_by_meme_id(eligible_meme.id)
    assert coin is not None and coin.transaction_hash == "0xabc"


async def test_second_creation_rejected(
    minting: CoinMintingService, eligible_meme: Meme, uploader: AsyncMock
) -> None:
    await minting.create_coin(request_for(eligible_meme.id))
    uploader.upload_meme_for_coin.reset_mock()

    with pytest.raises(CoinAlreadyCreatedError):
        await minting.create_coin(request_for(eligible_meme.id))
    uploader.upload_meme_for_coin.assert_not_called()


async def test_deployment_failure_returns_reason(
    minting: CoinMintingService, eligible_meme: Meme, deployer: AsyncMock, store: MemeStore
) -> None:
    deployer.deploy.side_effect = CoinDeploymentError("user rejected transaction", stage="deploy")

    result = await minting.create_coin(request_for(eligible_meme.id))

    assert result.success is False
    assert result.error == "user rejected transaction"
    assert not eligible_meme.coin_created
    assert store.coins() == []


async def test_upload_failure_returns_reason(
    minting: CoinMintingService, eligible_meme: Meme, uploader: AsyncMock, deployer: AsyncMock
) -> None:
    uploader.upload_meme_for_coin.side_effect = ConnectionError("gateway timeout")

    result = await minting.create_coin(request_for(eligible_meme.id))

    assert result.success is False
    assert "gateway timeout" in result.error
    deployer.deploy.assert_not_called()


async def test_unconfigured_deployment(store: MemeStore, eligible_meme: Meme) -> None:
    result = await CoinMintingService(store).create_coin(request_for(eligible_meme.id))

    assert result.success is False
    assert not eligible_meme.coin_created


def test_prepare_and_record_wallet_flow(store: MemeStore, eligible_meme: Meme) -> None:
    """Test preparing a draft and recording a wallet-signed result."""
    minting = CoinMintingService(store)

    draft = minting.prepare_coin(request_for(eligible_meme.id, name="My Coin", symbol="MINE"))
    coin = minting.record_coin_result(
        eligible_meme.id,
        CoinCreationResult(success=True, contract_address=CONTRACT, transaction_hash="0xdef", chain_id=8453),
        metadata=draft.metadata,
        creator=PAYOUT,
    )

    assert draft.name == "My Coin" and draft.symbol == "MINE"
    assert draft.chain_id == 8453 and draft.currency == "ZORA"
    assert coin is not None and coin.metadata["name"] == "My Coin"
    assert eligible_meme.coin.viewer_url == f"https://zora.co/coin/base:{CONTRACT}"


def test_record_failed_result(store: MemeStore, eligible_meme: Meme) -> None:
    minting = CoinMintingService(store)

    assert minting.record_coin_result(eligible_meme.id, CoinCreationResult(success=False, error="nope")) is None
    assert not eligible_meme.coin_created


def test_record_requires_contract_address(store: MemeStore, eligible_meme: Meme) -> None:
    with pytest.raises(InvalidCoinRequestError):
        CoinMintingService(store).record_coin_result(eligible_meme.id, CoinCreationResult(success=True))


def test_preferred_chain_is_default(store: MemeStore, eligible_meme: Meme) -> None:
    store.update_preferences(default_chain=84532)

    draft = CoinMintingService(store).prepare_coin(request_for(eligible_meme.id))

    assert draft.chain_id == 84532


def test_record_rejects_ineligible_meme(store: MemeStore, make_meme) -> None:
    """Test that a reported deployment cannot skip the eligibility check."""
    meme = store.add(make_meme({"views": 1}))

    with pytest.raises(CoinEligibilityError):
        CoinMintingService(store).record_coin_result(
            meme.id, CoinCreationResult(success=True, contract_address=CONTRACT, chain_id=8453)
        )

    assert not meme.coin_created
    assert store.coins() == []


def test_record_rejects_second_coin(store: MemeStore, eligible_meme: Meme) -> None:
    minting = CoinMintingService(store)
    result = CoinCreationResult(success=True, contract_address=CONTRACT, chain_id=8453)
    minting.record_coin_result(eligible_meme.id, result)

    with pytest.raises(CoinAlreadyCreatedError):
        minting.record_coin_result(eligible_meme.id, result)

    assert len(store.coins()) == 1


async def test_prepare_pins_metadata_for_wallet(
    minting: CoinMintingService, eligible_meme: Meme, uploader: AsyncMock
) -> None:
    """Test that the prepared draft carries a deployable metadata URI."""
    draft = await minting.prepare_pinned_coin(request_for(eligible_meme.id))

    assert draft.uri == "ipfs://QmMetadata"
    assert draft.ipfs_hash == "QmMetadata"
    assert draft.metadata["image"] == "ipfs://QmImage"
    assert draft.to_dict()["uri"] == "ipfs://QmMetadata"
    image_url, metadata = uploader.upload_meme_for_coin.await_args.args
    assert image_url == eligible_meme.image_url
    assert metadata["symbol"] == draft.symbol
    assert not eligible_meme.coin_created


async def test_prepare_without_uploader_leaves_uri_empty(store: MemeStore, eligible_meme: Meme) -> None:
    draft = await CoinMintingService(store).prepare_pinned_coin(request_for(eligible_meme.id))

    assert draft.uri is None
    assert draft.ipfs_hash is None


async def test_prepare_pin_failure_raises(
    minting: CoinMintingService, eligible_meme: Meme, uploader: AsyncMock
) -> None:
    uploader.upload_meme_for_coin.side_effect = ConnectionError("gateway timeout")

    with pytest.raises(CoinDeploymentError) as exc_info:
        await minting.prepare_pinned_coin(request_for(eligible_meme.id))

    assert exc_info.value.details["stage"] == "ipfs"


async def test_prepare_ineligible_meme_is_not_pinned(
    minting: CoinMintingService, store: MemeStore, make_meme, uploader: AsyncMock
) -> None:
    meme = store.add(make_meme({"views": 1}))

    with pytest.raises(CoinEligibilityError):
        await minting.prepare_pinned_coin(request_for(meme.id))

    uploader.upload_meme_for_coin.assert_not_called()
