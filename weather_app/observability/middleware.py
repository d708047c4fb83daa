from __future__ import annotations

from time import perf_counter
from typing import Any, Callable

import structlog


class AccessLogMiddleware:
    """Emits one access log line per HTTP request: method, path, elapsed time."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start = perf_counter()
        try:
            await self.app(scope, receive, send)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            structlog.get_logger("access").info(
                "http_request",
                method=scope.get("method"),
                path=scope.get("path"),
                elapsed_ms=round(elapsed_ms, 2),
            )
