"""Unit tests for state persistence."""

import json
from typing import TYPE_CHECKING

import pytest

from dspy_memecoin.database.local_state import COINS_KEY, MEMES_KEY, PREFERENCES_KEY, LocalStateStorage
from dspy_memecoin.exceptions import StorageError
from dspy_memecoin.models.coin import MemeCoin, UserPreferences
from dspy_memecoin.models.meme import CoinInfo
from dspy_memecoin.services.meme_store import MemeStore
from dspy_memecoin.services.persistence import StatePersistence

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def test_memes_round_trip(persistence: StatePersistence, make_meme) -> None:
    """Test that counters, timestamps and the coin latch survive a round trip."""
    meme = make_meme({"views": 150, "likes": 12, "shares": 6, "comments": 1}, category="Work", language="es")
    meme.mark_coin_created(CoinInfo(address="0x" + "a" * 40, chain_id=84532, transaction_hash="0xfeed"))

    persistence.save_memes([meme])
    (loaded,) = persistence.load_memes()

    assert loaded.to_dict() == meme.to_dict()
    assert loaded.metrics.created_at == meme.metrics.created_at
    assert loaded.coin_created and loaded.coin.chain_id == 84532
    assert loaded.eligible is True


def test_missing_state_degrades_to_defaults(persistence: StatePersistence) -> None:
    assert persistence.load_memes() == []
    assert persistence.load_coins() == []
    assert persistence.load_preferences() == UserPreferences()


def test_corrupt_documents_degrade_to_defaults(persistence: StatePersistence, storage: LocalStateStorage) -> None:
    """Test that undecodable or mistyped documents never fail loading."""
    storage.write(MEMES_KEY, {"not": "a list"})
    storage.write(COINS_KEY, [{"chainId": "not-a-number"}])
    storage.write(PREFERENCES_KEY, {"theme": "neon"})

    assert persistence.load_memes() == []
    assert persistence.load_coins() == []
    assert persistence.load_preferences() == UserPreferences()


def test_corrupt_meme_entries_are_skipped(persistence: StatePersistence, storage: LocalStateStorage, make_meme) -> None:
    good = make_meme()
    storage.write(MEMES_KEY, [{"templateId": "drake"}, good.to_dict()])

    assert [m.id for m in persistence.load_memes()] == [good.id]


def test_write_failures_are_swallowed(mocker: "MockerFixture", persistence: StatePersistence, make_meme) -> None:
    mocker.patch.object(persistence.storage, "write", side_effect=StorageError("disk full"))

    assert persistence.save_memes([make_meme()]) is False


def test_read_failures_are_swallowed(mocker: "MockerFixture", persistence: StatePersistence) -> None:
    mocker.patch.object(persistence.storage, "read", side_effect=StorageError("locked"))

    assert persistence.load_memes() == []
    assert persistence.load_preferences() == UserPreferences()


def test_coins_and_preferences_round_trip(persistence: StatePersistence) -> None:
    coin = MemeCoin(meme_id="meme-1", contract_address="0x" + "b" * 40, chain_id=8453, metadata={"name": "X"})
    preferences = UserPreferences(default_chain=84532, auto_create_coins=True, theme="dark")

    persistence.save_coins([coin])
    persistence.save_preferences(preferences)

    assert persistence.load_coins() == [coin]
    assert persistence.load_preferences() == preferences


def test_stored_keys_are_camel_case(persistence: StatePersistence, storage: LocalStateStorage) -> None:
    persistence.save_preferences(UserPreferences())

    assert set(storage.read(PREFERENCES_KEY)) == {"defaultChain", "autoCreateCoins", "notificationsEnabled", "theme"}


def test_export_and_import(persistence: StatePersistence, make_meme) -> None:
    meme = make_meme()
    persistence.save_memes([meme])

    exported = persistence.export_json()
    persistence.clear_all()
    assert persistence.load_memes() == []

    assert persistence.import_data(exported) is True
    assert [m.id for m in persistence.load_memes()] == [meme.id]
    assert "exportDate" in json.loads(exported)


def test_import_rejects_malformed_documents(persistence: StatePersistence) -> None:
    assert persistence.import_data("not json") is False
    assert persistence.import_data([1, 2]) is False
    assert persistence.import_data({"memes": [{"no": "id"}]}) is False


def test_non_mapping_meme_entries_are_skipped(
    persistence: StatePersistence, storage: LocalStateStorage, make_meme
) -> None:
    """Test that entries of the wrong shape are dropped instead of failing the load."""
    good = make_meme()
    bad_popularity = make_meme().to_dict()
    bad_popularity["popularity"] = [1, 2]
    bad_coin = make_meme().to_dict()
    bad_coin["coin"] = "0xabc"
    storage.write(MEMES_KEY, [good.to_dict(), "garbage", 42, None, bad_popularity, bad_coin])

    assert [m.id for m in persistence.load_memes()] == [good.id]


def test_store_starts_with_non_mapping_entries(persistence: StatePersistence, storage: LocalStateStorage) -> None:
    storage.write(MEMES_KEY, ["garbage"])

    assert len(MemeStore(persistence)) == 0


@pytest.mark.parametrize(
    "document",
    [
        {"memes": ["garbage", 42]},
        {"memes": [{"id": "meme-1", "templateId": "drake", "popularity": [1, 2]}]},
        {"memes": "garbage"},
        {"coins": ["garbage"]},
    ],
)
def test_import_rejects_non_mapping_entries(persistence: StatePersistence, document) -> None:
    assert persistence.import_data(document) is False
    assert persistence.load_memes() == []
