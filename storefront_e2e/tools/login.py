"""Login flows for the target sites."""

import re
from typing import Optional

from playwright.async_api import Page, expect, TimeoutError as PlaywrightTimeout

from ..core.errors import AuthenticationError, CredentialsMissingError
from ..core.logging import get_logger
from .consent import dismiss_cookie_banner

logger = get_logger(__name__)

# Action staging shop sits behind Cloudflare Access with Azure AD SSO
SSO_PROVIDER_LINK_NAME = "Azure AD ・ Action"
SSO_USERNAME_FIELD_NAME = "Enter your email, phone, or"
SSO_PASSWORD_FIELD_NAME = re.compile(r"Enter the password for")
SSO_RETURN_URL_PATTERN = "**/nl-nl**"

# STG Rijn-IJssel member portal
PORTAL_LOGIN_LINK = 'a[href="/mijn-captain/login"][target="_self"]'
PORTAL_LOGIN_URL_PATTERN = "**/mijn-captain/login"
PORTAL_USERNAME_FIELD = "#usernamew17504"
PORTAL_PASSWORD_FIELD = "#passwordw17504"
PORTAL_SUBMIT_BUTTON = "#btnlogin"

# Timeout constants (in milliseconds)
SSO_RETURN_TIMEOUT = 30000  # Round trip through Cloudflare Access and Azure AD
PORTAL_LOGIN_PAGE_TIMEOUT = 10000
LOGGED_IN_BANNER_TIMEOUT = 10000


def _require_credentials(username: Optional[str], password: Optional[str], what: str) -> None:
    if not username or not password:
        raise CredentialsMissingError(
            f"{what} credentials are not configured. "
            "Set them in the environment or in .env before running browser tests."
        )


async def login_with_sso(page: Page, username: Optional[str], password: Optional[str], home_path: str = "/nl-nl") -> dict:
    """
    Log in to the Action staging shop through Cloudflare Access and Azure AD.

    This function:
    - Opens the shop, which redirects to the Cloudflare Access login
    - Picks the Azure AD provider and signs in
    - Confirms "stay signed in"
    - Waits for the redirect back to the shop
    - Accepts the cookie banner if it shows up

    Args:
        page: Playwright page with the shop base URL configured
        username: SSO username
        password: SSO password
        home_path: Shop path the SSO round trip should end on

    Returns:
        dict with status and final URL

    Raises:
        CredentialsMissingError: If username or password is missing
        AuthenticationError: If the shop is not reached after signing in
    """
    _require_credentials(username, password, "SSO")

    logger.info("Starting SSO authentication flow")
    await page.goto(home_path)
    logger.info("Redirected to access gate", current_url=page.url)

    await page.get_by_role("link", name=SSO_PROVIDER_LINK_NAME).click()

    username_field = page.get_by_role("textbox", name=SSO_USERNAME_FIELD_NAME)
    await username_field.click()
    await username_field.fill(username)
    await page.get_by_role("button", name="Next").click()

    password_field = page.get_by_role("textbox", name=SSO_PASSWORD_FIELD_NAME)
    await password_field.click()
    await password_field.fill(password)
    await page.get_by_role("button", name="Sign in").click()

    logger.info("Confirming stay signed in")
    await page.get_by_role("button", name="Yes").click()

    try:
        await page.wait_for_url(SSO_RETURN_URL_PATTERN, timeout=SSO_RETURN_TIMEOUT)
    except PlaywrightTimeout as e:
        raise AuthenticationError(f"SSO login did not return to the shop. Current URL: {page.url}") from e

    await dismiss_cookie_banner(page)

    logger.info("Authentication successful", current_url=page.url)
    return {"status": "success", "message": "Login successful", "current_url": page.url}


def logged_in_banner_pattern(display_name: Optional[str] = None) -> re.Pattern:
    name = re.escape(display_name) if display_name else ".+"
    return re.compile(rf"Ingelogd als:.*{name}.*\(Uitloggen\)")


async def login_to_member_portal(
    page: Page,
    username: Optional[str],
    password: Optional[str],
    display_name: Optional[str] = None,
) -> dict:
    """
    Log in to the STG Rijn-IJssel member portal and verify the session.

    Args:
        page: Playwright page with the institutional site base URL configured
        username: Portal username
        password: Portal password
        display_name: Name expected in the "Ingelogd als" banner, if known

    Returns:
        dict with status and message

    Raises:
        CredentialsMissingError: If username or password is missing
        AssertionError: If the logged-in banner does not appear
    """
    _require_credentials(username, password, "Member portal")

    logger.info("Starting member portal login")
    await page.goto("/", wait_until="networkidle")

    await page.locator(PORTAL_LOGIN_LINK).filter(has_text="Inloggen").first.click()
    await page.wait_for_url(PORTAL_LOGIN_URL_PATTERN, timeout=PORTAL_LOGIN_PAGE_TIMEOUT)

    await page.locator(PORTAL_USERNAME_FIELD).fill(username)
    await page.locator(PORTAL_PASSWORD_FIELD).fill(password)
    await page.locator(PORTAL_SUBMIT_BUTTON).click()
    await page.wait_for_load_state("networkidle")

    banner = page.get_by_text(logged_in_banner_pattern(display_name)).first
    await expect(banner).to_be_visible(timeout=LOGGED_IN_BANNER_TIMEOUT)

    logger.info("Member portal login successful")
    return {"status": "success", "message": "Login successful"}
