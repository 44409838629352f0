"""Shared fixtures for forecast client tests."""

import json
from pathlib import Path
from typing import Callable, Dict, Optional

import httpx
import pytest

from skycast import config
from skycast.forecast.client import ForecastClient

FIXTURES = Path(__file__).parent / "fixtures"

LATITUDE = 47.20296790272209
LONGITUDE = -123.41670367098749

FULL_HEADERS = {
    "Content-Type": "application/json",
    "X-Forecast-API-Calls": "1",
    "X-Response-Time": "0.5",
}


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text())


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch):
    """Keep a developer's SKYCAST_API_KEY out of the tests."""
    monkeypatch.setattr(config, "API_KEY", None)


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def stub_client(requests_seen):
    """Build a ForecastClient whose transport is answered by ``handler``."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        api_key: Optional[str] = "fake_key",
        **kwargs,
    ) -> ForecastClient:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
        client = ForecastClient(api_key=api_key, http_client=http_client, **kwargs)
        return client

    return factory


def fixture_response(name: str, status_code: int = 200, headers: Optional[Dict[str, str]] = None):
    """Handler returning a JSON fixture with the given status and headers."""
    body = (FIXTURES / name).read_bytes()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body, headers=headers or {"Content-Type": "application/json"})

    return handler
