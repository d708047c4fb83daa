"""Observability helpers.

structlog JSON logging, an access-log ASGI middleware, and the Prometheus
instruments scraped from /metrics.
"""
