"""Check external links reachable from the institutional site's menu pages."""

from typing import Dict, Iterable, List, Optional, Union

import httpx
from playwright.async_api import Page, Error as PlaywrightError

from ..core.errors import NavigationError
from ..core.logging import get_logger

logger = get_logger(__name__)

MENU_SELECTORS = [
    "nav a",
    "header nav a",
    '[role="navigation"] a',
    ".menu a",
    ".nav a",
    ".navigation a",
    "#menu a",
    "#nav a",
]

# Status codes sites use to turn away automated clients
BOT_BLOCK_STATUSES = {403, 429}

# Timeouts
REQUEST_TIMEOUT_SECONDS = 30.0
MAX_REDIRECTS = 10
BROWSER_CHECK_TIMEOUT = 30000  # milliseconds

_COLLECT_HREFS_JS = """
(selectors) => {
    const hrefs = [];
    for (const selector of selectors) {
        for (const element of document.querySelectorAll(selector)) {
            if (element.href) hrefs.push(element.href);
        }
    }
    return hrefs;
}
"""


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def filter_menu_links(hrefs: Iterable[str], base_url: str) -> List[str]:
    """Keep same-site links, first occurrence order."""
    return _unique(href for href in hrefs if href and href.startswith(base_url))


def is_external_link(href: str, domain: str) -> bool:
    """True for http(s) links that do not point at ``domain``."""
    if not href.startswith(("http://", "https://")):
        return False
    return domain not in href


def filter_external_links(hrefs: Iterable[str], domain: str) -> List[str]:
    return _unique(href for href in hrefs if href and is_external_link(href, domain))


async def extract_menu_links(page: Page, base_url: str) -> List[str]:
    """Collect menu and submenu links on the current page that stay on the site."""
    hrefs = await page.evaluate(_COLLECT_HREFS_JS, MENU_SELECTORS)
    return filter_menu_links(hrefs, base_url)


async def extract_external_links(page: Page, domain: str) -> List[str]:
    """Collect every external http(s) link on the current page."""
    hrefs = await page.evaluate(_COLLECT_HREFS_JS, ["a[href]"])
    return filter_external_links(hrefs, domain)


async def check_link_in_browser(page: Page, url: str) -> bool:
    """
    Load a link in the real browser, then return to the page we came from.

    Used when a site blocks plain HTTP clients.

    Returns:
        True if the browser got an OK response
    """
    origin = page.url
    try:
        response = await page.goto(url, wait_until="domcontentloaded", timeout=BROWSER_CHECK_TIMEOUT)
        ok = response is not None and response.ok
    except PlaywrightError as e:
        logger.warning("Browser could not load link", link=url, error=str(e))
        ok = False

    try:
        await page.goto(origin, wait_until="networkidle")
    except PlaywrightError as e:
        logger.warning("Could not return to origin page", origin=origin, error=str(e))

    return ok


async def check_link(client: httpx.AsyncClient, page: Page, url: str) -> Optional[Union[int, str]]:
    """
    Check a single external link.

    Returns:
        None if the link works, otherwise the status code or failure reason
    """
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        logger.warning("Request failed, trying with browser", link=url, error=str(e))
        if await check_link_in_browser(page, url):
            return None
        return str(e) or type(e).__name__

    if response.status_code == 200:
        logger.debug("Link OK", link=url)
        return None

    if response.status_code in BOT_BLOCK_STATUSES:
        logger.info("Blocked by bot detection, trying with browser", link=url, status=response.status_code)
        if await check_link_in_browser(page, url):
            return None
        return f"Failed to load in browser after {response.status_code}"

    logger.warning("Link failed", link=url, status=response.status_code)
    return response.status_code


async def check_external_links(page: Page, base_url: str, domain: str) -> dict:
    """
    Visit every menu page once and check each unique external link once.

    Args:
        page: Playwright page
        base_url: Site root; menu links must start with it
        domain: Site domain; links containing it are internal

    Returns:
        dict with pages_checked, links_checked and broken_links

    Raises:
        NavigationError: If the start page has no menu links
    """
    visited_pages: List[str] = []
    checked_links: set = set()
    broken_links: List[Dict[str, Union[int, str]]] = []

    await page.goto(base_url, wait_until="networkidle")
    menu_links = await extract_menu_links(page, base_url)
    if not menu_links:
        raise NavigationError(f"No menu links found on {base_url}")
    logger.info("Found menu links", count=len(menu_links))

    async with httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        timeout=REQUEST_TIMEOUT_SECONDS,
    ) as client:
        for menu_link in menu_links:
            if menu_link in visited_pages:
                continue

            logger.info("Checking page", page_url=menu_link)
            await page.goto(menu_link, wait_until="networkidle")
            visited_pages.append(menu_link)

            external_links = await extract_external_links(page, domain)
            for link in external_links:
                if link in checked_links:
                    continue
                checked_links.add(link)

                failure = await check_link(client, page, link)
                if failure is not None:
                    broken_links.append({"page": menu_link, "link": link, "status": failure})

    logger.info(
        "External link check finished",
        pages_checked=len(visited_pages),
        links_checked=len(checked_links),
        broken=len(broken_links),
    )
    for broken in broken_links:
        logger.warning("Broken link", **broken)

    return {
        "pages_checked": visited_pages,
        "links_checked": sorted(checked_links),
        "broken_links": broken_links,
    }
