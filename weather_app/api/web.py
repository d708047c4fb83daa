from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from weather_app.api.dependencies import get_recorder
from weather_app.observability.metrics import RequestRecorder


POLL_INTERVAL_MS = 5000

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, recorder: RequestRecorder = Depends(get_recorder)) -> HTMLResponse:
    response = templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Weather Application",
            "temperature_url": "/api/temperature",
            "poll_interval_ms": POLL_INTERVAL_MS,
        },
    )
    return recorder.attach(response, "200", timed=False)
