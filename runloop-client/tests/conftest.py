"""Shared fixtures for runloop_client tests."""

from __future__ import annotations

import pytest

from runloop_client._http import HTTPClient

BASE_URL = "https://api.runloop.test"


@pytest.fixture(autouse=True)
def no_retry_backoff(monkeypatch):
    """Retry immediately so retry tests do not sleep."""
    monkeypatch.setattr(
        HTTPClient,
        "_retry_delay_seconds",
        staticmethod(lambda attempt, response=None: 0.0),
    )


@pytest.fixture
def devbox_payload():
    def _make(status: str = "running", devbox_id: str = "dbx_123") -> dict[str, object]:
        return {
            "id": devbox_id,
            "status": status,
            "create_time_ms": 1760000000000,
            "name": "dev",
            "metadata": {},
        }

    return _make
