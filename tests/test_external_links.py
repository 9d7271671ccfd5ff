"""Crawl the STG Rijn-IJssel menu pages and check every external link."""

import pytest

from storefront_e2e.tools.links import check_external_links

SITE_DOMAIN = "stgrijnijssel.nl"


@pytest.mark.integration
@pytest.mark.slow
async def test_no_broken_external_links(stg_page, stg_site):
    report = await check_external_links(stg_page, stg_site.base_url, SITE_DOMAIN)

    assert report["pages_checked"], "No menu pages found"
    broken = "\n".join(
        f"{item['page']} -> {item['link']} ({item['status']})" for item in report["broken_links"]
    )
    assert not report["broken_links"], f"Broken external links:\n{broken}"
