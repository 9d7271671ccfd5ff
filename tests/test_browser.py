"""Unit tests for the browser harness with Playwright patched out."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storefront_e2e.core.browser import VIEWPORT, BrowserManager, managed_browser
from storefront_e2e.core.config import SITE_ACTION, Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, headless=True, browser_timeout=1234, navigation_timeout=5678, auth_dir=tmp_path)


@pytest.fixture
def site(settings):
    return settings.site(SITE_ACTION)


@pytest.fixture
def playwright_stack():
    """Patch async_playwright with a chain of mocks and return them."""
    context = MagicMock()
    context.new_page = AsyncMock(return_value=MagicMock())
    context.storage_state = AsyncMock()
    context.close = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)

    with patch("storefront_e2e.core.browser.async_playwright", return_value=starter):
        yield {"playwright": playwright, "browser": browser, "context": context}


async def test_new_page_requires_start(site, settings):
    manager = BrowserManager(site, settings)

    with pytest.raises(RuntimeError, match="Browser not started"):
        await manager.new_page()


async def test_start_opens_context_on_site(site, settings, playwright_stack):
    manager = BrowserManager(site, settings)

    await manager.start()

    playwright_stack["playwright"].chromium.launch.assert_awaited_once_with(headless=True)
    playwright_stack["browser"].new_context.assert_awaited_once_with(
        base_url="https://shop-staging.action.com",
        viewport=VIEWPORT,
    )
    playwright_stack["context"].set_default_timeout.assert_called_once_with(1234)
    playwright_stack["context"].set_default_navigation_timeout.assert_called_once_with(5678)


async def test_start_replays_storage_state(site, settings, playwright_stack):
    manager = BrowserManager(site, settings)

    await manager.start(storage_state=site.storage_state_path)

    kwargs = playwright_stack["browser"].new_context.await_args.kwargs
    assert kwargs["storage_state"] == str(site.storage_state_path)


async def test_save_storage_state_creates_directory(site, settings, playwright_stack, tmp_path):
    target = tmp_path / "nested" / "action.json"
    manager = BrowserManager(site, settings)
    await manager.start()

    await manager.save_storage_state(target)

    assert target.parent.is_dir()
    playwright_stack["context"].storage_state.assert_awaited_once_with(path=str(target))


async def test_managed_browser_stops_on_error(site, settings, playwright_stack):
    with pytest.raises(ValueError):
        async with managed_browser(site, settings=settings) as manager:
            await manager.new_page()
            raise ValueError("boom")

    playwright_stack["context"].close.assert_awaited_once()
    playwright_stack["browser"].close.assert_awaited_once()
    playwright_stack["playwright"].stop.assert_awaited_once()
    assert manager.browser is None
