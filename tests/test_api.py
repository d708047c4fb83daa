from __future__ import annotations

import re

import httpx
import pytest


RFC3339 = re.compile(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d(\.\d+)?(Z|[+-]\d\d:\d\d)")


async def test_temperature_without_api_key_returns_fallback(api_client, provider) -> None:
    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")

    payload = resp.json()
    assert payload["temperature"] == 15.0
    assert payload["unit"] == "celsius"
    assert payload["source"] == "weather-api"
    assert RFC3339.fullmatch(payload["timestamp"])

    # Fallback mode never calls the provider.
    assert provider.requests == []


@pytest.mark.usefixtures("with_api_key")
async def test_temperature_proxies_provider_value(api_client, provider) -> None:
    provider.handler = provider.reply_temperature(-3.25)

    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 200
    assert resp.json()["temperature"] == -3.25

    assert len(provider.requests) == 1
    params = provider.requests[0].url.params
    assert params["q"] == "Oslo"
    assert params["appid"] == "test-key"
    assert params["units"] == "metric"


@pytest.mark.usefixtures("with_api_key")
async def test_temperature_upstream_404_returns_500_with_error_text(api_client, provider) -> None:
    provider.handler = lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"})

    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/plain")
    assert "Error fetching temperature" in resp.text
    assert "API returned status 404" in resp.text


@pytest.mark.usefixtures("with_api_key")
async def test_temperature_malformed_body_returns_500(api_client, provider) -> None:
    provider.handler = lambda request: httpx.Response(200, content=b"<html>not json</html>")

    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 500
    assert resp.text.startswith("Error fetching temperature: invalid response body")


@pytest.mark.usefixtures("with_api_key")
async def test_temperature_network_failure_returns_500(api_client, provider) -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider.handler = _refuse

    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 500
    assert resp.text == "Error fetching temperature: connection refused"


async def test_health_returns_exact_body(api_client) -> None:
    resp = await api_client.get("/health")
    assert resp.status_code == 200
    assert resp.content == b'{"status":"healthy"}'


async def test_index_serves_polling_page(api_client) -> None:
    resp = await api_client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "fetch(\"/api/temperature\")" in resp.text
    assert "setInterval(updateTemperature, 5000)" in resp.text


async def test_temperature_rejects_other_methods(api_client) -> None:
    resp = await api_client.post("/api/temperature")
    assert resp.status_code == 405


@pytest.mark.usefixtures("with_api_key")
async def test_temperature_without_main_block_reports_zero(api_client, provider) -> None:
    provider.handler = lambda request: httpx.Response(200, json={"cod": 200, "name": "Oslo"})

    resp = await api_client.get("/api/temperature")
    assert resp.status_code == 200
    assert resp.json()["temperature"] == 0.0
