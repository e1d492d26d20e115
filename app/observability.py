"""Prometheus metrics and request observability middleware."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram

from app.logging import get_logger

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = get_logger(__name__)

HTTP_REQUESTS = Counter(
    "erp_portal_http_requests_total",
    "Total inbound HTTP requests",
    ["method", "route", "status"],
)

HTTP_REQUEST_LATENCY = Histogram(
    "erp_portal_http_request_seconds",
    "Inbound HTTP request latency",
    ["method", "route"],
)

ERP_CALLS = Counter(
    "erp_portal_erp_calls_total",
    "Outbound calls to the ERP document API",
    ["method", "outcome"],  # outcome: ok, error, retried
)

ERP_CALL_LATENCY = Histogram(
    "erp_portal_erp_call_seconds",
    "Outbound ERP call latency",
    ["method"],
)

ERP_FETCH_DROPPED = Counter(
    "erp_portal_erp_fetch_dropped_total",
    "Documents dropped from list results because their detail fetch failed",
    ["doctype"],
)


def _route_template(scope: Scope) -> str:
    route = scope.get("route")
    path = getattr(route, "path", None)
    return path or "unmatched"


class ObservabilityMiddleware:
    """Record request count and latency per route template."""

    SKIP_PATHS = ("/metrics", "/health")

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path") in self.SKIP_PATHS:
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_holder = {"status": 500}

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed = time.perf_counter() - start
            route = _route_template(scope)
            method = scope.get("method", "GET")
            HTTP_REQUESTS.labels(method, route, str(status_holder["status"])).inc()
            HTTP_REQUEST_LATENCY.labels(method, route).observe(elapsed)
            if elapsed > 5:
                logger.warning("slow_request method=%s route=%s seconds=%.2f", method, route, elapsed)
