"""Capture one authentication snapshot per target site.

Browser tests replay the snapshot (cookies and local storage) instead of
logging in again. Sites without a login still get an empty snapshot so every
site is configured the same way.
"""

from typing import Optional

from ..core.browser import managed_browser
from ..core.config import SITE_ACTION, SiteConfig, Settings, get_settings
from ..core.logging import get_logger
from .login import login_with_sso

logger = get_logger(__name__)


async def capture_auth_state(site: SiteConfig, settings: Optional[Settings] = None) -> SiteConfig:
    """
    Log in to a site in a fresh browser and save the resulting session.

    Args:
        site: Target site
        settings: Suite settings (defaults to the global settings)

    Returns:
        The site, whose storage_state_path now exists

    Raises:
        CredentialsMissingError: If the site needs credentials that are not set
        AuthenticationError: If the login does not complete
    """
    settings = settings or get_settings()
    logger.info("Capturing authentication state", site=site.name, requires_login=site.requires_login)

    async with managed_browser(site, settings=settings) as browser:
        if site.requires_login:
            page = await browser.new_page()
            if site.name == SITE_ACTION:
                await login_with_sso(page, settings.sso_username, settings.sso_password, site.home_path)
            logger.info("Final URL after login", site=site.name, current_url=page.url)
        else:
            logger.info("No authentication required", site=site.name)

        await browser.save_storage_state(site.storage_state_path)

    return site

