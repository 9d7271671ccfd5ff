"""Add products to the shopping cart and move on to checkout."""

import re

from playwright.async_api import Page

from ..core.logging import get_logger

logger = get_logger(__name__)

ADD_TO_CART_TEST_ID = "AddPlus"
CART_URL_PATTERN = "**/winkelwagen**"
CART_LINK_NAME_PATTERN = re.compile(r"cart|winkelwagen", re.IGNORECASE)
CHECKOUT_LINK_NAME = "Naar bestellen"

# Timeout constants (in milliseconds)
CART_UPDATE_DELAY = 1000  # Let the mini cart register the product
CART_URL_TIMEOUT = 10000  # Navigation to the cart page


async def add_first_product_to_cart(page: Page) -> None:
    """Click the add button of the first product on the current page."""
    logger.info("Adding first product to cart")
    await page.get_by_test_id(ADD_TO_CART_TEST_ID).first.click()
    await page.wait_for_timeout(CART_UPDATE_DELAY)


async def open_cart(page: Page) -> None:
    """
    Open the shopping cart from the header.

    The cart icon has no stable test id, so several locators are combined and
    the first match wins.
    """
    cart_icon = page.locator('a[href*="winkelwagen"]').or_(
        page.locator('[data-testid*="cart"]')
    ).or_(
        page.locator("header").get_by_role("link", name=CART_LINK_NAME_PATTERN)
    )
    await cart_icon.first.click()
    await page.wait_for_url(CART_URL_PATTERN, timeout=CART_URL_TIMEOUT)
    logger.info("Cart opened", current_url=page.url)


async def proceed_to_checkout(page: Page) -> None:
    """Follow the cart's checkout link and wait for the form to settle."""
    await page.get_by_role("link", name=CHECKOUT_LINK_NAME).first.click()
    await page.wait_for_load_state("networkidle")
    logger.info("Checkout page loaded", current_url=page.url)
