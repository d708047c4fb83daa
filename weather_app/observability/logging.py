from __future__ import annotations

from logging.config import dictConfig
from typing import Any

import structlog

from weather_app.config import Settings


SERVICE_NAME = "weather-app"

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class ServiceContext:
    """Stamps every event with the service name and the city it reports on."""

    def __init__(self, city: str, service: str = SERVICE_NAME) -> None:
        self.fields = {"service": service, "city": city}

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in self.fields.items():
            event_dict.setdefault(key, value)
        return event_dict


def shared_processors(settings: Settings) -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        ServiceContext(settings.weather_city),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def configure_logging(settings: Settings) -> None:
    """Send structlog events and stdlib/uvicorn records to stdout as JSON lines.

    Called by every create_app(); a later call replaces the earlier handlers.
    """

    pre_chain = shared_processors(settings)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.processors.JSONRenderer(),
                    "foreign_pre_chain": pre_chain,
                }
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                }
            },
            "loggers": {
                name: {"handlers": ["stdout"], "level": settings.log_level, "propagate": False}
                for name in _SERVER_LOGGERS
            },
            "root": {"handlers": ["stdout"], "level": settings.log_level},
        }
    )
