# src/scrapers/storefront_scraper.py

"""Fetcher for Shopier storefront listing and product pages."""

import urllib.parse

from src.scrapers.base_scraper import BaseScraper
from src.scrapers.document import Document
from src.services.request_context import RequestContext


class StorefrontScraper(BaseScraper):
    """Fetches the two page shapes the service understands.

    Both pages are server-rendered HTML; the ``sid`` tokens baked into
    the URL templates are the ones the public site itself uses.
    """

    def __init__(self, context: RequestContext | None = None) -> None:
        super().__init__("storefront", context)

    def _get_homepage(self) -> str:
        """Return the storefront homepage URL."""
        return self.settings.SITE_BASE_URL.rstrip("/") + "/"

    def listing_url(self, shop: str) -> str:
        encoded = urllib.parse.quote(shop, safe="")
        return self.settings.LISTING_URL.format(shop=encoded)

    def detail_url(self, product_id: int) -> str:
        return self.settings.DETAIL_URL.format(product_id=product_id)

    def fetch_listing(self, shop: str) -> Document:
        """Fetch the listing page of storefront ``shop``."""
        return self.fetch(self.listing_url(shop))

    def fetch_product(self, product_id: int) -> Document:
        """Fetch the detail page of product ``product_id``."""
        return self.fetch(self.detail_url(product_id))
