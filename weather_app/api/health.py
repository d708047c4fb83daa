from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from weather_app.api.dependencies import get_recorder
from weather_app.models.schemas import HealthStatus
from weather_app.observability.metrics import RequestRecorder

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health(recorder: RequestRecorder = Depends(get_recorder)) -> Response:
    # Counted but not timed.
    return recorder.attach(JSONResponse(HealthStatus().model_dump()), "200", timed=False)
