# src/scrapers/base_scraper.py

"""Abstract base class for storefront page fetchers."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import FetchError
from src.scrapers.document import Document
from src.services.request_context import RequestContext


class BaseScraper(ABC):
    """Fetches one page per call and hands back a :class:`Document`.

    A scraper instance belongs to a single request. Failures surface as
    :class:`FetchError`; callers never see ``None``.
    """

    # Cloudflare challenge page markers (checked before keyword scan)
    _CF_CHALLENGE_MARKERS: list[str] = [
        "challenges.cloudflare.com",
        "cdn-cgi/challenge-platform",
        "just a moment",
        "cf-turnstile",
        "cf_chl_opt",
    ]

    def __init__(
        self,
        source_name: str,
        context: RequestContext | None = None,
    ) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"storefront_feed.{source_name}"
        )
        self.settings = Settings()
        self.context = context or RequestContext.with_timeout(
            self.settings.REQUEST_DEADLINE
        )
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: float = float(
            self.settings.REQUEST_TIMEOUT
        )

    def _timeout(self) -> float:
        """Network timeout capped by what is left of the deadline."""
        return min(self._request_timeout, self.context.remaining())

    def _ensure_live(self, url: str) -> None:
        """Raise if the request was cancelled or ran out of time."""
        if self.context.cancelled:
            raise FetchError(f"request cancelled before fetching {url}")
        if self.context.expired:
            raise FetchError(f"deadline exceeded fetching {url}")

    def _backoff(self, attempt: int) -> None:
        delay = self.settings.RETRY_DELAY * (attempt + 1)
        time.sleep(min(delay, self.context.remaining()))

    def _validate_response(
        self, resp: curl_requests.Response,
    ) -> bool:
        """Check for Cloudflare challenge pages and CAPTCHA indicators."""
        text = resp.text
        lower = text.lower()

        for marker in self._CF_CHALLENGE_MARKERS:
            if marker in lower:
                self.logger.warning(
                    "[%s] Cloudflare challenge detected "
                    "(marker: '%s')",
                    self.source_name,
                    marker,
                )
                return False

        # Skip the keyword scan on content-rich pages to avoid false
        # positives from product descriptions
        has_body_content = (
            "<body" in lower and len(text) > 5000
        )
        if not has_body_content:
            for keyword in self.settings.CAPTCHA_KEYWORDS:
                if keyword in lower:
                    self.logger.warning(
                        "[%s] CAPTCHA keyword '%s' "
                        "detected",
                        self.source_name,
                        keyword,
                    )
                    return False
        return True

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str],
    ) -> curl_requests.Response | None:
        """GET with retries; ``None`` once every attempt has failed."""
        for attempt in range(self.settings.MAX_RETRIES):
            self._ensure_live(url)
            try:
                resp = self.session.get(
                    url,
                    headers=headers,
                    timeout=self._timeout(),
                )
                if resp.status_code == 200:
                    if self._validate_response(resp):
                        return resp
                else:
                    self.logger.warning(
                        "[%s] HTTP %d on attempt %d",
                        self.source_name,
                        resp.status_code,
                        attempt + 1,
                    )
            except Exception as exc:
                self.logger.warning(
                    "[%s] Request error on attempt %d: %s",
                    self.source_name,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
            self._backoff(attempt)
        return None

    def _fetch_cloudscraper(
        self,
        url: str,
        headers: dict[str, str],
    ) -> str | None:
        """Single cloudscraper attempt (solves JS challenges)."""
        self._ensure_live(url)
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            resp: Any = scraper.get(
                url,
                headers=headers,
                timeout=self._timeout(),
            )
            if resp.status_code == 200:
                return str(resp.text)
            self.logger.warning(
                "[%s] cloudscraper HTTP %d",
                self.source_name,
                resp.status_code,
            )
        except Exception as exc:
            self.logger.error(
                "[%s] cloudscraper fallback also failed: %s",
                self.source_name,
                exc,
                exc_info=True,
            )
        return None

    def fetch(self, url: str) -> Document:
        """Fetch ``url``, falling back to cloudscraper on failure.

        Raises:
            FetchError: both clients failed, or the request was
                cancelled / ran past its deadline.
        """
        headers: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            "Referer": self._get_homepage(),
        }
        self.logger.info("[%s] Fetching %s", self.source_name, url)

        resp = self._fetch_get(url, headers)
        if resp is not None:
            return Document.from_html(resp.text, url)

        self.logger.info(
            "[%s] curl_cffi exhausted, falling back to cloudscraper",
            self.source_name,
        )
        text = self._fetch_cloudscraper(url, headers)
        if text is not None:
            return Document.from_html(text, url)

        raise FetchError(f"could not fetch {url}")

    @abstractmethod
    def _get_homepage(self) -> str:
        """Return the homepage URL for the Referer header."""
        ...
