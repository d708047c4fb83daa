from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from weather_app.api.health import router as health_router
from weather_app.api.metrics import router as metrics_router
from weather_app.api.temperature import router as temperature_router
from weather_app.api.web import router as web_router
from weather_app.config import Settings, get_settings
from weather_app.observability.logging import configure_logging
from weather_app.observability.metrics import ServiceMetrics, build_metrics
from weather_app.observability.middleware import AccessLogMiddleware
from weather_app.services.weather_client import WeatherClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    owned_client: WeatherClient | None = None
    if app.state.weather_client is None:
        owned_client = app.state.weather_client = WeatherClient(settings)

    structlog.get_logger("app").info(
        "startup",
        city=settings.weather_city,
        fallback_mode=not settings.has_api_key,
    )
    try:
        yield
    finally:
        if owned_client is not None:
            await owned_client.aclose()
            app.state.weather_client = None


def create_app(
    settings: Settings | None = None,
    *,
    metrics: ServiceMetrics | None = None,
    weather_client: WeatherClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="Weather App", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.metrics = metrics if metrics is not None else build_metrics()
    # Built in lifespan unless injected.
    app.state.weather_client = weather_client

    app.add_middleware(AccessLogMiddleware)

    app.include_router(temperature_router)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(web_router)
    return app


app = create_app()
