"""Pytest configuration and fixtures."""

import random
from typing import Any, Callable, Dict, Optional

import pytest
from unittest.mock import Mock

from dspy_memecoin.agents.caption_generator import CaptionGenerator
from dspy_memecoin.agents.template_selector import TemplateSelector
from dspy_memecoin.database.local_state import LocalStateStorage
from dspy_memecoin.models.meme import EngagementMetrics, Meme
from dspy_memecoin.services.catalog import TemplateCatalog
from dspy_memecoin.services.engagement import EngagementTracker
from dspy_memecoin.services.meme_service import MemeGenerationService
from dspy_memecoin.services.meme_store import MemeStore
from dspy_memecoin.services.persistence import StatePersistence

ELIGIBLE_COUNTS = {"views": 100, "likes": 10, "shares": 5, "downloads": 0, "comments": 0}


@pytest.fixture
def catalog() -> TemplateCatalog:
    """Fixture for the built-in template catalog."""
    return TemplateCatalog.from_seed()


@pytest.fixture
def failing_classifier() -> Mock:
    """Classifier that always errors, forcing the keyword fallback."""
    return Mock(side_effect=RuntimeError("classifier offline"))


@pytest.fixture
def failing_captioner() -> Mock:
    """Caption predictor that always errors, forcing the rule-based captions."""
    return Mock(side_effect=RuntimeError("captioner offline"))


@pytest.fixture
def selector(catalog: TemplateCatalog, failing_classifier: Mock) -> TemplateSelector:
    """Fixture for a selector with no working classifier and a seeded random source."""
    return TemplateSelector(catalog=catalog, classifier=failing_classifier, rng=random.Random(7))


@pytest.fixture
def storage(tmp_path) -> LocalStateStorage:
    """Fixture for a SQLite state store in a temporary directory."""
    return LocalStateStorage(f"sqlite:///{tmp_path / 'state.db'}")


@pytest.fixture
def persistence(storage: LocalStateStorage) -> StatePersistence:
    return StatePersistence(storage)


@pytest.fixture
def store(persistence: StatePersistence) -> MemeStore:
    """Fixture for a meme store backed by temporary SQLite storage."""
    return MemeStore(persistence)


@pytest.fixture
def tracker(store: MemeStore) -> EngagementTracker:
    return EngagementTracker(store, rng=random.Random(42))


@pytest.fixture
def generation_service(
    store: MemeStore, selector: TemplateSelector, failing_captioner: Mock
) -> MemeGenerationService:
    return MemeGenerationService(
        store, selector=selector, caption_generator=CaptionGenerator(generator=failing_captioner)
    )


@pytest.fixture
def make_meme() -> Callable[..., Meme]:
    """Factory for memes with chosen counters."""

    def _make(counts: Optional[Dict[str, int]] = None, **fields: Any) -> Meme:
        defaults: Dict[str, Any] = {
            "template_id": "drake",
            "template_name": "Drake Hotline Bling",
            "image_url": "https://i.imgflip.com/30b1gx.jpg",
            "prompt": "tabs vs spaces",
            "top_text": "The old way",
            "bottom_text": "tabs vs spaces",
        }
        defaults.update(fields)
        meme = Meme(**defaults, metrics=EngagementMetrics(**(counts or {})))
        meme.refresh_eligibility()
        return meme

    return _make


@pytest.fixture
def eligible_meme(store: MemeStore, make_meme: Callable[..., Meme]) -> Meme:
    """An eligible meme already in the store."""
    return store.add(make_meme(dict(ELIGIBLE_COUNTS), category="Programming"))
