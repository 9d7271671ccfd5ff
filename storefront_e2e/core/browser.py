"""Playwright browser harness for managing browser lifecycle."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from .config import SiteConfig, Settings, get_settings
from .logging import get_logger

logger = get_logger(__name__)

VIEWPORT = {"width": 1280, "height": 720}


class BrowserManager:
    """Manages a Playwright browser and one isolated context for a target site."""

    def __init__(self, site: SiteConfig, settings: Optional[Settings] = None):
        """Initialize browser manager."""
        self.site = site
        self.settings = settings or get_settings()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

    async def start(self, storage_state: Optional[Union[str, Path]] = None) -> None:
        """
        Start Playwright, launch Chromium and open a fresh context.

        Args:
            storage_state: Optional authentication snapshot to replay
        """
        if self.browser:
            logger.warning("Browser already started", site=self.site.name)
            return

        logger.info(
            "Starting Playwright browser",
            site=self.site.name,
            headless=self.settings.headless,
            with_storage_state=storage_state is not None,
        )

        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(headless=self.settings.headless)

        context_options = {
            "base_url": self.site.base_url,
            "viewport": VIEWPORT,
        }
        if storage_state is not None:
            context_options["storage_state"] = str(storage_state)

        self.context = await self.browser.new_context(**context_options)
        self.context.set_default_timeout(self.settings.browser_timeout)
        self.context.set_default_navigation_timeout(self.settings.navigation_timeout)

        logger.info("Browser started successfully", site=self.site.name)

    async def stop(self) -> None:
        """Stop browser and cleanup resources."""
        if not self.browser:
            logger.warning("Browser not running", site=self.site.name)
            return

        logger.info("Stopping browser", site=self.site.name)

        if self.context:
            await self.context.close()
            self.context = None

        if self.browser:
            await self.browser.close()
            self.browser = None

        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

        logger.info("Browser stopped", site=self.site.name)

    async def new_page(self) -> Page:
        """
        Create a new page in the browser context.

        Returns:
            New page instance

        Raises:
            RuntimeError: If browser not started
        """
        if not self.context:
            raise RuntimeError("Browser not started. Call start() first.")

        page = await self.context.new_page()
        logger.debug("Created new page", site=self.site.name)
        return page

    async def save_storage_state(self, path: Union[str, Path]) -> None:
        """Write the context's cookies and local storage to a JSON snapshot."""
        if not self.context:
            raise RuntimeError("Browser not started. Call start() first.")

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        await self.context.storage_state(path=str(path))
        logger.info("Saved authentication state", site=self.site.name, path=str(path))


@asynccontextmanager
async def managed_browser(
    site: SiteConfig,
    storage_state: Optional[Union[str, Path]] = None,
    settings: Optional[Settings] = None,
):
    """
    Context manager for browser lifecycle.

    Usage:
        async with managed_browser(site) as browser:
            page = await browser.new_page()
            # ... use page
    """
    browser = BrowserManager(site, settings)
    try:
        await browser.start(storage_state=storage_state)
        yield browser
    finally:
        await browser.stop()
