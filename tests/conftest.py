"""Shared pytest fixtures for printfmt tests."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from printfmt.main import api_app  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line("markers", "integration: tests across the CLI, API and features")


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # The CLI replaces root handlers; put them back so later tests log normally
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture(scope="function")
def api_client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(api_app)

