from __future__ import annotations

import argparse

import structlog
import uvicorn

from weather_app.config import get_settings
from weather_app.main import app


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Temperature API with Prometheus metrics")
    parser.add_argument("--host", default=settings.host, help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (default: $PORT or 8080)")
    args = parser.parse_args()

    structlog.get_logger("app").info("server_starting", host=args.host, port=args.port)

    # uvicorn exits with status 1 if the socket cannot be bound.
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
