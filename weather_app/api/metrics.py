from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from weather_app.api.dependencies import get_metrics
from weather_app.observability.metrics import ServiceMetrics


router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
async def metrics(service_metrics: ServiceMetrics = Depends(get_metrics)) -> Response:
    body, content_type = service_metrics.render()
    return Response(content=body, media_type=content_type)
