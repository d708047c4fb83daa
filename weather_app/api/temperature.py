from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from weather_app.api.dependencies import get_metrics, get_recorder, get_weather_client
from weather_app.models.schemas import TemperatureReading
from weather_app.observability.metrics import RequestRecorder, ServiceMetrics
from weather_app.services.weather_client import WeatherClient, WeatherFetchError

router = APIRouter(prefix="/api", tags=["temperature"])


@router.get(
    "/temperature",
    response_model=TemperatureReading,
    responses={500: {"description": "Upstream provider failed", "content": {"text/plain": {}}}},
)
async def get_temperature(
    client: WeatherClient = Depends(get_weather_client),
    metrics: ServiceMetrics = Depends(get_metrics),
    recorder: RequestRecorder = Depends(get_recorder),
) -> Response:
    try:
        temperature = await client.fetch_temperature()
    except WeatherFetchError as exc:
        response = PlainTextResponse(f"Error fetching temperature: {exc}", status_code=500)
        return recorder.attach(response, "500")

    metrics.set_temperature(temperature)

    reading = TemperatureReading(temperature=temperature)
    return recorder.attach(JSONResponse(reading.model_dump()), "200")
