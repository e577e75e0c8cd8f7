"""Dependency injection container for application components."""
import logging

from app.config import Settings
from app.api import DealsAPIClient
from app.services import CachedSnapshotProvider, DealService
from app.handlers import DealHandler

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Initializes and wires up all application dependencies.
    """

    def __init__(self, settings: Settings):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        # Upstream deals feed client
        self.deals_api = DealsAPIClient(
            url=settings.deals_api_url,
            timeout=settings.deals_api_timeout_seconds,
        )
        logger.info(f"[Container] Deals API client initialized for {settings.deals_api_url}")

        # Snapshot provider (TTL cache over the upstream feed)
        self.snapshot_provider = CachedSnapshotProvider(
            self.deals_api,
            ttl_seconds=settings.snapshot_ttl_seconds,
        )
        logger.info(
            f"[Container] Snapshot provider initialized "
            f"(ttl={settings.snapshot_ttl_seconds}s)"
        )

        self.deal_service = DealService(self.snapshot_provider)
        self.deal_handler = DealHandler(self.deal_service)

        logger.info("[Container] Container initialized successfully")

    async def shutdown(self):
        """Clean up resources on shutdown."""
        logger.info("[Container] Shutting down container")
        try:
            await self.deals_api.close()
            logger.info("[Container] Deals API client closed")
        except Exception as e:
            logger.error(f"[Container] Error closing Deals API client: {e}")
