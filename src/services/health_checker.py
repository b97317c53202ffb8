# src/services/health_checker.py

"""Storefront connectivity health check."""

import logging
import time
from dataclasses import dataclass

from src.scrapers.storefront_scraper import StorefrontScraper

logger = logging.getLogger("storefront_feed.health")

_HEALTH_TIMEOUT = 10  # seconds
_SLOW_THRESHOLD_MS = 5000


@dataclass
class HealthResult:
    """Result of probing the storefront."""

    target: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_storefront(scraper: StorefrontScraper | None = None) -> HealthResult:
    """GET the storefront homepage and classify the outcome."""
    scraper = scraper or StorefrontScraper()
    homepage = scraper._get_homepage()

    start = time.monotonic()
    try:
        resp = scraper.session.get(
            homepage,
            headers={
                **scraper.settings.DEFAULT_HEADERS,
                "Referer": homepage,
            },
            timeout=_HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            result = HealthResult(
                target=homepage,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )
        elif elapsed_ms > _SLOW_THRESHOLD_MS:
            result = HealthResult(
                target=homepage,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )
        else:
            result = HealthResult(
                target=homepage,
                status="ok",
                latency_ms=elapsed_ms,
                message="",
            )
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        result = HealthResult(
            target=homepage,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )

    logger.info(
        "Health check %s: %s (%.0fms) %s",
        result.target,
        result.status,
        result.latency_ms,
        result.message,
    )
    return result
