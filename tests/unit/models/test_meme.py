"""Unit tests for the meme lifecycle model."""

from datetime import timezone

import pytest

from dspy_memecoin.exceptions import CoinAlreadyCreatedError
from dspy_memecoin.models.meme import (
    UNKNOWN_COIN_ADDRESS,
    CoinInfo,
    EngagementMetrics,
    Meme,
    MemeState,
    parse_timestamp,
)
from dspy_memecoin.models.template import MemeTemplate, TextSlot

ADDRESS = "0x" + "c" * 40


def test_lifecycle_moves_forward(make_meme) -> None:
    """Test Created -> Engaged -> Eligible -> CoinCreated."""
    meme = make_meme()
    assert meme.state is MemeState.CREATED

    meme.metrics.apply({"views": 1})
    assert meme.state is MemeState.ENGAGED

    meme.metrics.apply({"views": 99, "likes": 10, "shares": 5})
    meme.refresh_eligibility()
    assert meme.state is MemeState.ELIGIBLE

    meme.mark_coin_created(CoinInfo(address=ADDRESS, chain_id=8453))
    assert meme.state is MemeState.COIN_CREATED
    assert meme.coin_address == ADDRESS


def test_coin_latch_is_one_way(make_meme) -> None:
    meme = make_meme()
    meme.mark_coin_created(CoinInfo(address=ADDRESS, chain_id=8453))

    with pytest.raises(CoinAlreadyCreatedError):
        meme.mark_coin_created(CoinInfo(address="0x" + "d" * 40, chain_id=8453))
    assert meme.coin_address == ADDRESS


def test_metrics_apply_is_all_or_nothing() -> None:
    metrics = EngagementMetrics()

    with pytest.raises(ValueError):
        metrics.apply({"likes": 5, "shares": -1})
    with pytest.raises(ValueError):
        metrics.apply({"retweets": 1})
    assert metrics.likes == 0


def test_legacy_coin_flag_is_restored(make_meme) -> None:
    data = make_meme().to_dict()
    data.update({"coin": None, "coinCreated": True, "coinAddress": ADDRESS})

    assert Meme.from_dict(data).coin_address == ADDRESS


def test_coin_flag_without_address_keeps_latch(make_meme) -> None:
    """Test that a stored coin flag is never cleared, even when the address was lost."""
    data = make_meme().to_dict()
    data.update({"coin": None, "coinCreated": True, "coinAddress": None})

    meme = Meme.from_dict(data)

    assert meme.coin_created
    assert meme.coin_address == UNKNOWN_COIN_ADDRESS
    assert meme.state is MemeState.COIN_CREATED
    assert Meme.from_dict(meme.to_dict()).coin_created


@pytest.mark.parametrize("entry", ["garbage", 42, None, ["id"]])
def test_non_mapping_entries_are_rejected(entry) -> None:
    with pytest.raises(TypeError):
        Meme.from_dict(entry)


def test_non_mapping_popularity_is_rejected(make_meme) -> None:
    data = make_meme().to_dict()
    data["popularity"] = [1, 2]

    with pytest.raises(TypeError):
        Meme.from_dict(data)


def test_missing_popularity_defaults_to_zero(make_meme) -> None:
    data = make_meme().to_dict()
    del data["popularity"]

    meme = Meme.from_dict(data)
    assert not meme.metrics.has_engagement()
    assert meme.metrics.last_interaction == meme.created_at


def test_naive_timestamps_are_read_as_utc() -> None:
    parsed = parse_timestamp("2024-05-01T12:00:00")

    assert parsed.tzinfo is timezone.utc
    assert parse_timestamp("2024-05-01T12:00:00Z") == parsed


def test_template_requires_a_slot() -> None:
    with pytest.raises(ValueError):
        MemeTemplate(id="empty", name="Empty", image_ref="x", text_slots={})
    with pytest.raises(ValueError):
        MemeTemplate(id="odd", name="Odd", image_ref="x", text_slots={"middle": TextSlot(0, 0, 1)})
