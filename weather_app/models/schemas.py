from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


SOURCE_LABEL = "weather-api"


def rfc3339_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class TemperatureReading(BaseModel):
    temperature: float
    unit: Literal["celsius"] = "celsius"
    timestamp: str = Field(default_factory=rfc3339_now)
    source: str = SOURCE_LABEL


class HealthStatus(BaseModel):
    status: Literal["healthy"] = "healthy"


class UpstreamMain(BaseModel):
    temp: float = Field(default=0.0, strict=True)


class UpstreamWeather(BaseModel):
    """Subset of the provider's current-weather payload.

    Absent fields decode to zero values; only invalid JSON or a wrongly typed
    field is rejected.
    """

    main: UpstreamMain = Field(default_factory=UpstreamMain)
