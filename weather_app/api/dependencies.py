from __future__ import annotations

from fastapi import Depends, Request

from weather_app.observability.metrics import RequestRecorder, ServiceMetrics
from weather_app.services.weather_client import WeatherClient


def get_metrics(request: Request) -> ServiceMetrics:
    return request.app.state.metrics


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


def get_recorder(request: Request, metrics: ServiceMetrics = Depends(get_metrics)) -> RequestRecorder:
    return RequestRecorder(metrics, method=request.method, endpoint=request.url.path)
