# tests/test_health_checker.py

"""Tests for the storefront health probe."""

import unittest
from unittest.mock import MagicMock, patch

from src.services.health_checker import HealthResult, probe_storefront


def _make_scraper(
    status: int = 200, error: Exception | None = None
) -> MagicMock:
    """Build a mock scraper whose session returns ``status``."""
    mock_scraper = MagicMock()
    mock_scraper._get_homepage.return_value = "https://www.shopier.com/"
    mock_scraper.settings = MagicMock()
    mock_scraper.settings.DEFAULT_HEADERS = {}
    if error is not None:
        mock_scraper.session.get.side_effect = error
    else:
        mock_resp = MagicMock()
        mock_resp.status_code = status
        mock_scraper.session.get.return_value = mock_resp
    return mock_scraper


class TestProbeStorefront(unittest.TestCase):
    """Tests for probe_storefront."""

    def test_ok_status(self) -> None:
        """A fast 200 response should return 'ok' status."""
        result = probe_storefront(_make_scraper(200))
        self.assertIsInstance(result, HealthResult)
        self.assertEqual(result.status, "ok")
        self.assertEqual(result.target, "https://www.shopier.com/")
        self.assertEqual(result.message, "")

    def test_down_on_http_error(self) -> None:
        """A non-200 response should return 'down' status."""
        result = probe_storefront(_make_scraper(503))
        self.assertEqual(result.status, "down")
        self.assertEqual(result.message, "HTTP 503")

    def test_down_on_exception(self) -> None:
        """A network exception should return 'down' status."""
        result = probe_storefront(
            _make_scraper(error=ConnectionError("Network unreachable"))
        )
        self.assertEqual(result.status, "down")
        self.assertIn("Network unreachable", result.message)

    @patch("src.services.health_checker.time")
    def test_slow_status(self, mock_time: MagicMock) -> None:
        """A 200 slower than the threshold is 'slow'."""
        mock_time.monotonic.side_effect = [0.0, 6.0]
        result = probe_storefront(_make_scraper(200))
        self.assertEqual(result.status, "slow")
        self.assertAlmostEqual(result.latency_ms, 6000.0)

    def test_message_truncated(self) -> None:
        """Long error messages are truncated to 80 chars."""
        result = probe_storefront(
            _make_scraper(error=RuntimeError("x" * 200))
        )
        self.assertEqual(len(result.message), 80)


if __name__ == "__main__":
    unittest.main()
