"""Unit tests for capturing authentication snapshots."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storefront_e2e.core.config import SITE_ACTION, SITE_STG_RIJN_IJSSEL, Settings
from storefront_e2e.core.errors import CredentialsMissingError
from storefront_e2e.tools.auth_setup import capture_auth_state


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, auth_dir=tmp_path / ".auth", sso_username="user@example.com", sso_password="pw")


@pytest.fixture
def fake_browser(mock_page):
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=mock_page)
    browser.save_storage_state = AsyncMock()

    @asynccontextmanager
    async def fake_managed_browser(site, storage_state=None, settings=None):
        yield browser

    with patch("storefront_e2e.tools.auth_setup.managed_browser", fake_managed_browser):
        yield browser


async def test_action_logs_in_and_saves_state(settings, fake_browser, mock_page):
    site = settings.site(SITE_ACTION)

    with patch("storefront_e2e.tools.auth_setup.login_with_sso", new=AsyncMock()) as login:
        result = await capture_auth_state(site, settings)

    assert result is site
    login.assert_awaited_once_with(mock_page, "user@example.com", "pw", "/nl-nl")
    fake_browser.save_storage_state.assert_awaited_once_with(site.storage_state_path)


async def test_site_without_login_saves_empty_state(settings, fake_browser):
    site = settings.site(SITE_STG_RIJN_IJSSEL)

    with patch("storefront_e2e.tools.auth_setup.login_with_sso", new=AsyncMock()) as login:
        await capture_auth_state(site, settings)

    login.assert_not_awaited()
    fake_browser.new_page.assert_not_awaited()
    fake_browser.save_storage_state.assert_awaited_once_with(site.storage_state_path)


async def test_missing_credentials_abort_before_saving(tmp_path, fake_browser):
    settings = Settings(_env_file=None, auth_dir=tmp_path, sso_username=None, sso_password=None)

    with pytest.raises(CredentialsMissingError):
        await capture_auth_state(settings.site(SITE_ACTION), settings)

    fake_browser.save_storage_state.assert_not_awaited()
