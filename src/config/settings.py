# src/config/settings.py

"""Central configuration for the storefront_feed service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

from src.models.product import SiteUrls

load_dotenv()

_ENV_PREFIX = "STOREFRONT_"


def _env_str(name: str, default: str) -> str:
    """Read a string override from ``STOREFRONT_<name>``."""
    return os.getenv(f"{_ENV_PREFIX}{name}", default)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(f"{_ENV_PREFIX}{name}")
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(f"{_ENV_PREFIX}{name}")
    return float(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(f"{_ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the storefront_feed service."""

    # --- Addresses ---
    SERVICE_BASE_URL: str = _env_str(
        "SERVICE_BASE_URL", "http://localhost:8000"
    )
    SITE_BASE_URL: str = _env_str(
        "SITE_BASE_URL", "https://www.shopier.com"
    )
    STOREFRONT_URL: str = _env_str(
        "STOREFRONT_URL", "https://shopier.com/storefront.php"
    )
    LISTING_URL: str = _env_str(
        "LISTING_URL",
        "https://www.shopier.com/ShowProductNew/storefront.php"
        "?shop={shop}&sid=VUpoM2Z1Rzl6a0ZuTGM1ZzExXy0xXyBfIA==",
    )
    DETAIL_URL: str = _env_str(
        "DETAIL_URL",
        "https://www.shopier.com/ShowProductNew/products.php"
        "?id={product_id}&sid=aWVHQ1dqd1o1RGFUYlZ1NjBfMF8gXyA=",
    )

    # --- Extraction ---
    CURRENCY_MARKER: str = _env_str("CURRENCY_MARKER", "TL")
    ROW_ERROR_POLICY: str = _env_str("ROW_ERROR_POLICY", "fail_fast")
    DETAIL_NOT_FOUND_AS_404: bool = _env_bool(
        "DETAIL_NOT_FOUND_AS_404", False
    )

    # --- Fetching ---
    REQUEST_TIMEOUT: int = _env_int("REQUEST_TIMEOUT", 15)
    REQUEST_DEADLINE: float = _env_float("REQUEST_DEADLINE", 30.0)
    MAX_RETRIES: int = _env_int("MAX_RETRIES", 3)
    RETRY_DELAY: float = _env_float("RETRY_DELAY", 1.0)
    CAPTCHA_KEYWORDS: list[str] = [
        "captcha",
        "verify you are human",
        "unusual traffic",
        "automated requests",
    ]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Server ---
    HOST: str = _env_str("HOST", "0.0.0.0")
    PORT: int = _env_int("PORT", 8000)
    CORS_METHODS: list[str] = ["GET", "POST"]
    CORS_HEADERS: list[str] = ["X-Requested-With", "Content-Type"]
    CORS_ORIGINS: str = "*"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

    @classmethod
    def site_urls(cls) -> SiteUrls:
        """Build the base-address bundle used for derived links."""
        return SiteUrls(
            service_base=cls.SERVICE_BASE_URL,
            site_base=cls.SITE_BASE_URL,
            storefront=cls.STOREFRONT_URL,
        )
