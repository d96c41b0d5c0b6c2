"""Service registry that wires the browser services together."""
import asyncio
import logging

from file_browser.core.config import Settings
from file_browser.core.request_context import request_context
from file_browser.core.tasks import LifecycleManager
from file_browser.services.browser_engine import BrowserEngine
from file_browser.services.entry_scanner import EntryScanner
from file_browser.services.health_service import HealthService
from file_browser.services.path_resolver import PathResolver
from file_browser.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Container object for dependency injection."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.path_resolver = PathResolver(
            settings.root,
            confine_to_root=settings.confine_to_root,
        )
        self.entry_scanner = EntryScanner()
        self.browser_engine = BrowserEngine(
            root=settings.root,
            resolver=self.path_resolver,
            scanner=self.entry_scanner,
            files_url_prefix=settings.files_url_prefix,
        )
        self.session_store = SessionStore(idle_timeout=settings.session_idle_timeout)
        self.health_service = HealthService(
            root=settings.root,
            session_store=self.session_store,
        )
        self._startup_lock = asyncio.Lock()
        self._shutdown_lock = asyncio.Lock()
        self._lifecycle = LifecycleManager(name="service-registry", logger=logger)

    async def startup(self) -> None:
        async with self._startup_lock:
            with request_context("bg:registry"):
                if self._lifecycle.running:
                    return
                logger.info("Serving %s", self.settings.root)
                interval = self.settings.session_sweep_interval
                if self.settings.session_idle_timeout > 0 and interval > 0:
                    self._lifecycle.spawn(self.session_store.run_sweeper(interval), name="session-sweeper")
                    logger.info("Session sweeper started (every %ss)", interval)

    async def shutdown(self) -> None:
        async with self._shutdown_lock:
            with request_context("bg:registry"):
                logger.info("Stopping background services")
                await self._lifecycle.cancel_all()
                logger.info("Background services stopped")
