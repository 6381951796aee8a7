"""
Request metrics middleware.

Times every request and reports it to the injected telemetry sink,
labelled with the matched route template to keep cardinality bounded.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..telemetry import ITelemetrySink

UNMATCHED_ROUTE = "unmatched"


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Record method, route, status and duration for each request."""

    def __init__(self, app: ASGIApp, sink: ITelemetrySink):
        super().__init__(app)
        self._sink = sink

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # The router stores the matched route in the shared scope
            route = request.scope.get("route")
            self._sink.record_request(
                request.method,
                getattr(route, "path", UNMATCHED_ROUTE),
                status_code,
                time.perf_counter() - start,
            )
