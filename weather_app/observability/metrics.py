from __future__ import annotations

from time import perf_counter

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)
from fastapi import BackgroundTasks
from fastapi.responses import Response


class ServiceMetrics:
    """Prometheus instruments for the HTTP surface, bound to one registry.

    prometheus_client guards every value with its own lock, so a single
    instance can be shared by all concurrent requests.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()

        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=Histogram.DEFAULT_BUCKETS,
            registry=self.registry,
        )
        self.current_temperature_celsius = Gauge(
            "current_temperature_celsius",
            "Current temperature in Celsius",
            registry=self.registry,
        )

    def count_request(self, method: str, endpoint: str, status: str) -> None:
        self.http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()

    def observe_duration(self, method: str, endpoint: str, seconds: float) -> None:
        self.http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(seconds)

    def set_temperature(self, value: float) -> None:
        self.current_temperature_celsius.set(value)

    def render(self) -> tuple[bytes, str]:
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def build_metrics(*, runtime_collectors: bool = True) -> ServiceMetrics:
    """Create a fresh registry; the production one also reports process stats."""

    registry = CollectorRegistry()
    if runtime_collectors:
        ProcessCollector(registry=registry)
        PlatformCollector(registry=registry)
    return ServiceMetrics(registry)


class RequestRecorder:
    """Records one request into ServiceMetrics once its response has been sent.

    The clock starts when the recorder is created, i.e. on handler entry.
    """

    def __init__(self, metrics: ServiceMetrics, method: str, endpoint: str) -> None:
        self.metrics = metrics
        self.method = method
        self.endpoint = endpoint
        self._start = perf_counter()

    def attach(self, response: Response, status: str, *, timed: bool = True) -> Response:
        tasks = BackgroundTasks()
        tasks.add_task(self.record, status, timed=timed)
        response.background = tasks
        return response

    def record(self, status: str, *, timed: bool = True) -> None:
        if timed:
            self.metrics.observe_duration(self.method, self.endpoint, perf_counter() - self._start)
        self.metrics.count_request(self.method, self.endpoint, status)
