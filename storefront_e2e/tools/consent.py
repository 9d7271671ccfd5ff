"""Dismiss the cookie consent banner."""

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from ..core.logging import get_logger

logger = get_logger(__name__)

ACCEPT_BUTTON_NAME = "Accepteren"

# Timeout constants (in milliseconds)
BANNER_WAIT_TIMEOUT = 5000  # Bounded wait for the banner to show up
BANNER_DISMISS_DELAY = 1000  # Let the banner animate out


async def dismiss_cookie_banner(page: Page, timeout: int = BANNER_WAIT_TIMEOUT) -> bool:
    """
    Accept the cookie banner if it becomes visible within ``timeout``.

    A missing banner is normal (already accepted, or replayed from the
    authentication snapshot), so absence never fails the caller.

    Args:
        page: Playwright page
        timeout: Maximum wait for the banner in milliseconds

    Returns:
        True if the banner was dismissed, False if it never appeared
    """
    accept_button = page.get_by_role("button", name=ACCEPT_BUTTON_NAME)
    try:
        await accept_button.wait_for(state="visible", timeout=timeout)
    except PlaywrightTimeout:
        logger.debug("No cookie banner present")
        return False

    await accept_button.click()
    await page.wait_for_timeout(BANNER_DISMISS_DELAY)
    logger.info("Cookie banner accepted")
    return True
