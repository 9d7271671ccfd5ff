"""Shared pytest fixtures and hooks for all tests."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront_e2e.core.browser import managed_browser
from storefront_e2e.core.config import SITE_ACTION, SITE_STG_RIJN_IJSSEL, SiteConfig, Settings, get_settings
from storefront_e2e.core.errors import AuthenticationError
from storefront_e2e.core.logging import setup_logging
from storefront_e2e.core.report import RunReport
from storefront_e2e.tools.auth_setup import capture_auth_state

setup_logging()

# Auth failures are fatal for the run; reruns would only repeat the sign-in
AUTH_RERUN_EXCEPT = ["AuthenticationError", "CredentialsMissingError"]


def pytest_addoption(parser):
    parser.addoption(
        "--results-json",
        action="store",
        default=None,
        help="Write a JSON run report to this path",
    )


_run_report = None


def pytest_configure(config):
    global _run_report
    path = config.getoption("--results-json")
    _run_report = RunReport(path) if path else None


def pytest_collection_modifyitems(config, items):
    """Give browser tests the configured number of whole-test reruns."""
    retries = get_settings().retries
    if not retries:
        return
    for item in items:
        if item.get_closest_marker("integration") and not item.get_closest_marker("flaky"):
            item.add_marker(pytest.mark.flaky(reruns=retries, rerun_except=AUTH_RERUN_EXCEPT))


def pytest_runtest_logreport(report):
    if _run_report is None:
        return
    if report.when != "call" and report.outcome == "passed":
        return
    message = None
    if report.failed and report.longreprtext:
        message = report.longreprtext.strip().splitlines()[-1]
    _run_report.record(report.nodeid, report.outcome, report.duration, when=report.when, message=message)


def pytest_sessionfinish(session, exitstatus):
    if _run_report is not None:
        _run_report.write()


@pytest.fixture(scope="session")
def settings() -> Settings:
    return get_settings()


@pytest.fixture(scope="session")
def action_site(settings):
    return settings.site(SITE_ACTION)


@pytest.fixture(scope="session")
def stg_site(settings):
    return settings.site(SITE_STG_RIJN_IJSSEL)


_auth_failures = {}


def _capture_once(site: SiteConfig, settings: Settings):
    """
    Capture the snapshot for a site at most once per run.

    Reruns drop cached fixture results, so a failed capture is remembered
    here and re-raised without signing in again.
    """
    failure = _auth_failures.get(site.name)
    if failure is not None:
        raise AuthenticationError(f"Authentication setup for {site.name} already failed: {failure}") from failure
    try:
        asyncio.run(capture_auth_state(site, settings))
    except Exception as e:
        _auth_failures[site.name] = e
        raise
    return site.storage_state_path


@pytest.fixture(scope="session")
def action_auth_state(action_site, settings):
    """Log in once per run; every Action browser test replays this session."""
    return _capture_once(action_site, settings)


@pytest.fixture(scope="session")
def stg_auth_state(stg_site, settings):
    return _capture_once(stg_site, settings)


@pytest.fixture
async def action_page(action_site, action_auth_state, settings):
    """Fresh browser and context on the Action shop with the saved session."""
    async with managed_browser(action_site, storage_state=action_auth_state, settings=settings) as browser:
        page = await browser.new_page()
        yield page
        await page.close()


@pytest.fixture
async def stg_page(stg_site, stg_auth_state, settings):
    """Fresh browser and context on the STG Rijn-IJssel site."""
    async with managed_browser(stg_site, storage_state=stg_auth_state, settings=settings) as browser:
        page = await browser.new_page()
        yield page
        await page.close()


def _mock_locator():
    locator = MagicMock()
    locator.click = AsyncMock()
    locator.fill = AsyncMock()
    locator.wait_for = AsyncMock()
    locator.first = locator
    locator.or_.return_value = locator
    locator.filter.return_value = locator
    locator.get_by_role.return_value = locator
    return locator


@pytest.fixture
def mock_page():
    """
    Playwright page double for driving flows without a browser.

    Locators are created on first lookup and remembered, so tests can assert
    on them afterwards via ``page.labels``, ``page.roles``, ``page.test_ids``,
    ``page.selectors`` and ``page.texts``.
    """
    page = MagicMock()
    page.url = "https://shop-staging.action.com/nl-nl/checkout"
    page.labels = {}
    page.roles = {}
    page.test_ids = {}
    page.selectors = {}
    page.texts = {}

    page.get_by_label.side_effect = lambda label, **kwargs: page.labels.setdefault(label, _mock_locator())
    page.get_by_role.side_effect = lambda role, name=None, **kwargs: page.roles.setdefault((role, name), _mock_locator())
    page.get_by_test_id.side_effect = lambda test_id: page.test_ids.setdefault(test_id, _mock_locator())
    page.locator.side_effect = lambda selector, **kwargs: page.selectors.setdefault(selector, _mock_locator())
    page.get_by_text.side_effect = lambda text, **kwargs: page.texts.setdefault(text, _mock_locator())

    page.goto = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.wait_for_url = AsyncMock()
    page.screenshot = AsyncMock()
    page.evaluate = AsyncMock(return_value=[])
    page.close = AsyncMock()
    return page
