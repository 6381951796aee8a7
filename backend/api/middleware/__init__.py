"""API middleware."""

from .metrics import RequestMetricsMiddleware
from .timeout import TimeoutMiddleware

__all__ = ["RequestMetricsMiddleware", "TimeoutMiddleware"]
