"""
Request telemetry.

The metrics middleware records through an ITelemetrySink that is handed
to it when the app is built, so tests and alternative backends can swap
the sink without touching global state.

The default sink writes to an OpenTelemetry SDK meter provider whose
Prometheus reader feeds the prometheus_client registry served at
/metrics.
"""

from typing import Optional, Protocol, runtime_checkable

from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider

METER_NAME = "users_api"

# Module-level provider cache
_meter_provider: Optional[MeterProvider] = None


def get_meter_provider() -> MeterProvider:
    """
    Get the process meter provider, creating it on first use.

    The Prometheus reader registers itself with prometheus_client's
    default registry, so there must be only one per process.
    """
    global _meter_provider
    if _meter_provider is None:
        _meter_provider = MeterProvider(metric_readers=[PrometheusMetricReader()])
    return _meter_provider


@runtime_checkable
class ITelemetrySink(Protocol):
    """Receives one observation per handled HTTP request."""

    def record_request(
        self,
        method: str,
        route: str,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        """
        Record a completed request.

        Args:
            method: HTTP method
            route: Route template (e.g. /users/{user_id}), not the raw path
            status_code: Response status code
            duration_seconds: Wall time spent handling the request
        """
        ...


class OpenTelemetrySink(ITelemetrySink):
    """Records request count and latency as OpenTelemetry instruments."""

    def __init__(self, meter: Optional[Meter] = None):
        meter = meter or get_meter_provider().get_meter(METER_NAME)
        self._requests = meter.create_counter(
            "http.server.requests",
            description="Total number of HTTP requests received",
        )
        self._duration = meter.create_histogram(
            "http.server.duration",
            unit="s",
            description="HTTP request duration in seconds",
        )

    def record_request(
        self,
        method: str,
        route: str,
        status_code: int,
        duration_seconds: float,
    ) -> None:
        attributes = {
            "http.request.method": method,
            "http.route": route,
            "http.response.status_code": status_code,
        }
        self._requests.add(1, attributes)
        self._duration.record(duration_seconds, attributes)
