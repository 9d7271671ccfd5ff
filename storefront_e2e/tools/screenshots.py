"""Diagnostic screenshots that never fail the test taking them."""

from pathlib import Path
from typing import Optional, Union

from playwright.async_api import Page, Error as PlaywrightError

from ..core.logging import get_logger

logger = get_logger(__name__)


async def take_screenshot(page: Page, path: Union[str, Path], full_page: bool = True) -> Optional[Path]:
    """
    Save a screenshot of the page.

    Args:
        page: Playwright page
        path: Output file; parent directories are created
        full_page: Capture the whole scrollable page

    Returns:
        The written path, or None if the screenshot could not be taken
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        await page.screenshot(path=str(path), full_page=full_page)
    except (PlaywrightError, OSError) as e:
        logger.warning("Screenshot failed", path=str(path), error=str(e))
        return None

    logger.debug("Screenshot saved", path=str(path))
    return path
