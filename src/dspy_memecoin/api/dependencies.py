"""API dependencies."""

from dataclasses import dataclass
from typing import Optional

from ..agents.caption_generator import CaptionGenerator
from ..agents.template_selector import TemplateSelector
from ..database.local_state import LocalStateStorage
from ..services.catalog import TemplateCatalog, default_catalog
from ..services.coin_minting import CoinMintingService
from ..services.engagement import EngagementTracker
from ..services.ipfs import PinataIPFSClient
from ..services.meme_service import BatchSessions, MemeGenerationService
from ..services.meme_store import MemeStore
from ..services.persistence import StatePersistence
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything the routers need, wired once per process."""

    catalog: TemplateCatalog
    store: MemeStore
    tracker: EngagementTracker
    generator: MemeGenerationService
    minting: CoinMintingService


def build_services(
    database_url: Optional[str] = None,
    store: Optional[MemeStore] = None,
    selector: Optional[TemplateSelector] = None,
    caption_generator: Optional[CaptionGenerator] = None,
) -> Services:
    """
    Wire the services together.

    Args:
        database_url: Local state database, defaults to the configured one
        store: Pre-built store, skips opening the database
        selector: Template selector override
        caption_generator: Caption generator override

    Returns:
        Services: The wired services
    """
    if store is None:
        store = MemeStore(StatePersistence(LocalStateStorage(database_url)))
    selector = selector or TemplateSelector(catalog=default_catalog)
    ipfs = PinataIPFSClient()
    return Services(
        catalog=selector.catalog,
        store=store,
        tracker=EngagementTracker(store),
        generator=MemeGenerationService(
            store,
            selector=selector,
            caption_generator=caption_generator or CaptionGenerator(),
            sessions=BatchSessions(),
        ),
        minting=CoinMintingService(store, uploader=ipfs if ipfs.configured else None),
    )


_services: Optional[Services] = None


def get_services() -> Services:
    """
    Get the process-wide services, creating them on first use.

    Returns:
        Services: The wired services
    """
    global _services
    if _services is None:
        logger.info("initializing_services")
        _services = build_services()
    return _services


def reset_services() -> None:
    """Drop the process-wide services so the next request rebuilds them."""
    global _services
    _services = None
