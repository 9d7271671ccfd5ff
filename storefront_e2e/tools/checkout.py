"""
Checkout flow driver for the Action storefront.

This module reproduces one checkout attempt end to end:
1. Opens the storefront and accepts the cookie banner when it shows up
2. Adds the first product to the cart and opens the cart
3. Proceeds to checkout and fills the contact and address fields
4. Submits payment with iDEAL
5. Classifies where the browser ended up and asserts it matches expectations

A successful submission redirects to the external payment processor (iDEAL);
a rejected address keeps the browser on the checkout page with a visible
validation message. Nothing is retried here; retries happen per test in the
runner.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Optional

from playwright.async_api import Page, expect

from ..core.config import SITE_ACTION, SiteConfig, Settings, get_settings
from ..core.logging import get_logger
from .cart import add_first_product_to_cart, open_cart, proceed_to_checkout
from .consent import dismiss_cookie_banner
from .screenshots import take_screenshot

logger = get_logger(__name__)

PAY_BUTTON_NAME = "Betalen met iDEAL"
CHECKOUT_URL_MARKER = "checkout"

# Form labels on the checkout page
EMAIL_LABEL = "E-mailadres"
FIRST_NAME_LABEL = "Voornaam"
LAST_NAME_LABEL = "Achternaam"
PHONE_LABEL = "Telefoonnummer"
ADDRESS_LABEL = "Adres & huisnummer"
POSTCODE_LABEL = "Postcode"
CITY_LABEL = "Woonplaats"

# Timeout constants (in milliseconds)
SUBMIT_SETTLE_DELAY = 2000  # Let the shop validate and start redirecting
PROCESSOR_REDIRECT_TIMEOUT = 10000  # Redirect to the payment processor
ERROR_MESSAGE_TIMEOUT = 5000  # Validation message to become visible


class CheckoutOutcome(str, Enum):
    """Where the browser ended up after submitting payment."""
    REACHED_PROCESSOR = "reached processor"
    STAYED_ON_CHECKOUT = "stayed on checkout"


def classify_outcome(url: str, processor_domain: str) -> CheckoutOutcome:
    """
    Classify a post-submit URL.

    Args:
        url: Current page URL
        processor_domain: Domain of the external payment processor

    Returns:
        REACHED_PROCESSOR if the URL is on the processor's domain,
        STAYED_ON_CHECKOUT otherwise
    """
    if processor_domain.lower() in url.lower():
        return CheckoutOutcome.REACHED_PROCESSOR
    return CheckoutOutcome.STAYED_ON_CHECKOUT


def processor_url_pattern(processor_domain: str) -> re.Pattern:
    return re.compile(rf".*{re.escape(processor_domain)}.*", re.IGNORECASE)


def before_submit_screenshot_path(screenshot_dir: Path, test_id: Optional[str] = None) -> Path:
    if test_id:
        return screenshot_dir / "address-tests" / f"{test_id}-before-click.png"
    return screenshot_dir / "before-ideal-click.png"


async def fill_checkout_form(page: Page, address_field: str, settings: Settings) -> None:
    """
    Fill the checkout form.

    Contact fields come from settings (CHECKOUT_* environment variables with
    defaults); the address line is the value under test.
    """
    logger.info("Filling checkout form", address_field=address_field)

    fields = [
        (EMAIL_LABEL, settings.checkout_email),
        (FIRST_NAME_LABEL, settings.checkout_firstname),
        (LAST_NAME_LABEL, settings.checkout_lastname),
        (PHONE_LABEL, settings.checkout_phone),
        (ADDRESS_LABEL, address_field),
        (POSTCODE_LABEL, settings.checkout_postcode),
        (CITY_LABEL, settings.checkout_city),
    ]
    for label, value in fields:
        await page.get_by_label(label).first.fill(value)


async def submit_payment(page: Page) -> None:
    """Click the iDEAL payment button and give the shop time to respond."""
    logger.info("Submitting payment")
    await page.get_by_role("button", name=PAY_BUTTON_NAME).click()
    await page.wait_for_timeout(SUBMIT_SETTLE_DELAY)


async def complete_checkout_flow(
    page: Page,
    address_field: str,
    should_reach_processor: bool = True,
    expected_error_message: Optional[str] = None,
    test_id: Optional[str] = None,
    site: Optional[SiteConfig] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Run one checkout attempt and assert its outcome.

    Args:
        page: Playwright page whose context has the storefront base URL
        address_field: Combined "Adres & huisnummer" value
        should_reach_processor: True if the shop should accept the address
        expected_error_message: Text that must be visible when the shop rejects it
        test_id: Identifier used to name the diagnostic screenshot
        site: Target site (defaults to the Action storefront)
        settings: Suite settings (defaults to the global settings)

    Returns:
        dict with status, outcome, current_url and screenshot path

    Raises:
        AssertionError: If the observed outcome differs from the expectation
        playwright TimeoutError: If a bounded wait expires
    """
    settings = settings or get_settings()
    site = site or settings.site(SITE_ACTION)
    processor_domain = site.payment_processor_domain or settings.resolve_processor_domain(site.base_url)

    log = logger.bind(test_id=test_id, site=site.name)
    log.info("Starting checkout flow", should_reach_processor=should_reach_processor)

    await page.goto(site.home_path)
    await page.wait_for_load_state("networkidle")

    await dismiss_cookie_banner(page)

    await add_first_product_to_cart(page)
    await open_cart(page)
    await proceed_to_checkout(page)

    await fill_checkout_form(page, address_field, settings)

    screenshot = await take_screenshot(
        page, before_submit_screenshot_path(settings.screenshot_dir, test_id)
    )

    await submit_payment(page)

    if should_reach_processor:
        await page.wait_for_url(processor_url_pattern(processor_domain), timeout=PROCESSOR_REDIRECT_TIMEOUT)

    current_url = page.url
    outcome = classify_outcome(current_url, processor_domain)
    log.info("Checkout outcome", outcome=outcome.value, current_url=current_url)

    if should_reach_processor:
        assert outcome == CheckoutOutcome.REACHED_PROCESSOR, (
            f"Expected redirect to {processor_domain}, but stayed at {current_url}"
        )
    else:
        assert outcome == CheckoutOutcome.STAYED_ON_CHECKOUT, (
            f"Expected the shop to reject '{address_field}', but it redirected to {current_url}"
        )
        assert CHECKOUT_URL_MARKER in current_url, (
            f"Expected to remain on the checkout page, but at {current_url}"
        )
        if expected_error_message:
            await expect(page.get_by_text(expected_error_message)).to_be_visible(
                timeout=ERROR_MESSAGE_TIMEOUT
            )

    return {
        "status": "success",
        "outcome": outcome.value,
        "current_url": current_url,
        "screenshot": str(screenshot) if screenshot else None,
    }
