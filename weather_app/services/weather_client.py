from __future__ import annotations

from time import perf_counter

import httpx
import structlog
from pydantic import ValidationError

from weather_app.config import Settings
from weather_app.models.schemas import UpstreamWeather


FALLBACK_TEMPERATURE = 15.0


class WeatherFetchError(Exception):
    """Raised when the provider could not produce a temperature."""


class UpstreamStatusError(WeatherFetchError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"API returned status {status_code}")
        self.status_code = status_code


class WeatherClient:
    """Fetches the current temperature for the configured city.

    Without an API key the client never touches the network and reports
    FALLBACK_TEMPERATURE instead.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    async def fetch_temperature(self) -> float:
        settings = self.settings
        log = structlog.get_logger("weather")

        if not settings.has_api_key:
            log.debug("weather_fallback", temperature=FALLBACK_TEMPERATURE)
            return FALLBACK_TEMPERATURE

        params = {
            "q": settings.weather_city,
            "appid": settings.weather_api_key,
            "units": "metric",
        }

        start = perf_counter()
        try:
            temperature = await self._request(params)
        except WeatherFetchError:
            log.exception(
                "weather_fetch_failed",
                city=settings.weather_city,
                elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
            )
            raise

        log.info(
            "weather_fetch",
            city=settings.weather_city,
            elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
            temperature=temperature,
        )
        return temperature

    async def _request(self, params: dict[str, str]) -> float:
        try:
            resp = await self._http.get(self.settings.weather_api_url, params=params, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise WeatherFetchError(str(exc) or exc.__class__.__name__) from exc

        if resp.status_code != httpx.codes.OK:
            raise UpstreamStatusError(resp.status_code)

        try:
            payload = UpstreamWeather.model_validate_json(resp.content)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise WeatherFetchError(f"invalid response body: {first['msg']}") from exc

        return payload.main.temp

    async def aclose(self) -> None:
        await self._http.aclose()
