# tests/conftest.py

"""Shared pytest fixtures for the storefront_feed tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def mock_sleep() -> Generator[None, None, None]:
    """Patch time.sleep globally so retry loops run instantly."""
    with patch("time.sleep"):
        yield


@pytest.fixture(autouse=True, scope="session")
def isolated_logs_dir(
    tmp_path_factory: pytest.TempPathFactory,
) -> Generator[None, None, None]:
    """Write per-run log files under pytest's temp dir, not the repo."""
    logs_dir = tmp_path_factory.getbasetemp() / "logs"
    with patch.object(Settings, "LOGS_DIR", logs_dir):
        yield
