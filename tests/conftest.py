from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from weather_app.config import get_settings
from weather_app.main import create_app
from weather_app.observability.metrics import ServiceMetrics
from weather_app.services.weather_client import WeatherClient


UpstreamHandler = Callable[[httpx.Request], httpx.Response]


class FakeProvider:
    """Stands in for the weather provider behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: UpstreamHandler = self.reply_temperature(21.5)

    @staticmethod
    def reply_temperature(temp: float) -> UpstreamHandler:
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=json.dumps({"main": {"temp": temp, "humidity": 40}}))

        return _handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WEATHER_API_KEY", "WEATHER_CITY", "WEATHER_API_URL", "PORT", "HOST", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def metrics() -> ServiceMetrics:
    return ServiceMetrics()


@pytest.fixture
def with_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    monkeypatch.setenv("WEATHER_CITY", "Oslo")
    get_settings.cache_clear()


@pytest.fixture
async def weather_client(provider: FakeProvider) -> AsyncIterator[WeatherClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(provider))
    client = WeatherClient(get_settings(), http_client=http_client)
    yield client
    await client.aclose()


@pytest.fixture
async def api_client(metrics: ServiceMetrics, weather_client: WeatherClient) -> AsyncIterator[AsyncClient]:
    app = create_app(get_settings(), metrics=metrics, weather_client=weather_client)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
