"""Unit tests for the meme generation service."""

import pytest

from dspy_memecoin.agents.caption_generator import CaptionGenerator
from dspy_memecoin.exceptions import PromptValidationError
from dspy_memecoin.models.meme import MemeState
from dspy_memecoin.services.meme_service import DEFAULT_SESSION, BatchSessions, MemeGenerationService
from dspy_memecoin.services.meme_store import MemeStore


@pytest.mark.parametrize("prompt", ["", "   ", None])
def test_empty_prompt_rejected(generation_service: MemeGenerationService, store: MemeStore, prompt) -> None:
    with pytest.raises(PromptValidationError) as exc_info:
        generation_service.generate(prompt)

    assert exc_info.value.message == "Prompt is required"
    assert len(store) == 0


def test_empty_prompt_keeps_session_usage(generation_service: MemeGenerationService) -> None:
    """Test that a rejected request does not reset the session's used templates."""
    generation_service.generate("cats")
    used_before = generation_service.sessions.get().used_ids

    with pytest.raises(PromptValidationError):
        generation_service.generate("", reset_templates=True)

    assert generation_service.sessions.get().used_ids == used_before


def test_generate_stores_meme(generation_service: MemeGenerationService, store: MemeStore) -> None:
    meme = generation_service.generate("Deploying on Friday is never simple", category="Programming")

    assert store.get(meme.id) is meme
    assert meme.state is MemeState.CREATED
    assert meme.category == "Programming"
    assert meme.prompt == "Deploying on Friday is never simple"
    assert meme.top_text or meme.bottom_text
    assert meme.image_url.startswith("https://")


def test_all_category_is_stored_as_uncategorized(generation_service: MemeGenerationService) -> None:
    meme = generation_service.generate("anything", category="All")

    assert meme.category is None


def test_batch_uses_distinct_templates(generation_service: MemeGenerationService) -> None:
    memes = generation_service.generate_batch("monday mornings", 5)

    assert len(memes) == 5
    assert len({m.template_id for m in memes}) == 5


def test_batch_with_classifier_uses_distinct_templates(generation_service: MemeGenerationService) -> None:
    memes = generation_service.generate_batch("monday mornings", 4, deterministic=False)

    assert len({m.template_id for m in memes}) == 4


def test_batch_rejects_zero_count(generation_service: MemeGenerationService) -> None:
    with pytest.raises(ValueError):
        generation_service.generate_batch("cats", 0)


def test_sessions_are_isolated(generation_service: MemeGenerationService) -> None:
    """Test that one session's used templates do not affect another's."""
    generation_service.generate_batch("cats", 3, session_id="alice")
    generation_service.generate("dogs", session_id="bob")

    assert len(generation_service.sessions.get("alice").used_ids) == 3
    assert len(generation_service.sessions.get("bob").used_ids) == 1
    assert len(generation_service.sessions.get(DEFAULT_SESSION).used_ids) == 0


def test_reset_templates_clears_session(generation_service: MemeGenerationService) -> None:
    generation_service.generate_batch("cats", 3)

    generation_service.generate("cats", reset_templates=True)

    assert len(generation_service.sessions.get().used_ids) == 1


def test_sessions_are_bounded() -> None:
    """Test that idle sessions are evicted once the limit is reached."""
    sessions = BatchSessions(max_sessions=3)
    for index in range(50):
        sessions.get(f"s{index}")

    assert len(sessions) == 3
    assert "s49" in sessions and "s0" not in sessions


def test_recently_used_session_survives_eviction() -> None:
    sessions = BatchSessions(max_sessions=2)
    first = sessions.get("a")
    first.mark("drake")
    sessions.get("b")
    sessions.get("a")

    sessions.get("c")

    assert "b" not in sessions
    assert sessions.get("a") is first
    assert "drake" in first


def test_generation_respects_session_limit(store: MemeStore, selector, failing_captioner) -> None:
    service = MemeGenerationService(
        store,
        selector=selector,
        caption_generator=CaptionGenerator(generator=failing_captioner),
        sessions=BatchSessions(max_sessions=5),
    )
    for index in range(20):
        service.generate("cats", session_id=f"s{index}")

    assert len(service.sessions) == 5
    assert len(store) == 20


def test_discard_drops_session(generation_service: MemeGenerationService) -> None:
    generation_service.generate("cats", session_id="alice")

    generation_service.sessions.discard("alice")

    assert "alice" not in generation_service.sessions
