"""
Refresh the saved authentication snapshot for a target site.

Usage: python scripts/capture_auth.py [action|stg-rijn-ijssel]

When to use:
- The Action SSO session in .auth/action.json has expired
- Debugging the Cloudflare Access / Azure AD login outside pytest

Requirements:
- .env with SSO_USERNAME and SSO_PASSWORD for the Action shop
- HEADLESS=false recommended for visual verification
"""

import asyncio
import sys

from storefront_e2e.core.config import SITE_ACTION, get_settings
from storefront_e2e.core.logging import setup_logging
from storefront_e2e.tools.auth_setup import capture_auth_state

setup_logging()


async def capture(site_name: str):
    settings = get_settings()
    site = settings.site(site_name)

    print(f"\n🔐 Capturing authentication state for {site.name}")
    print("=" * 60)

    await capture_auth_state(site, settings)

    print(f"\n✅ Saved to {site.storage_state_path}")


if __name__ == "__main__":
    asyncio.run(capture(sys.argv[1] if len(sys.argv) > 1 else SITE_ACTION))
