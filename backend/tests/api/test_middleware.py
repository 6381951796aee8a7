"""Tests for API middleware."""

import asyncio
import time

import httpx
import pytest
from unittest.mock import MagicMock
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_user_service
from api.middleware import RequestMetricsMiddleware, TimeoutMiddleware
from modules.users.exceptions import UserNotFoundError
from modules.users.service import UserService
from shared.config import get_settings
from tests.modules.users.conftest import InMemoryUserRepository


class SlowUserRepository(InMemoryUserRepository):
    """Repository whose lookups block the calling thread."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    def get_by_id(self, user_id):
        time.sleep(self.delay)
        return super().get_by_id(user_id)


class TestRequestMetricsMiddleware:
    def test_records_route_template(self):
        """Metrics use the matched template, not the raw path."""
        sink = MagicMock()
        service = MagicMock()

        async def missing(user_id):
            raise UserNotFoundError(user_id)

        service.get_user_by_id = missing
        app = create_app(telemetry=sink)
        app.dependency_overrides[get_user_service] = lambda: service

        TestClient(app).get("/users/42")

        method, route, status_code, duration = sink.record_request.call_args.args
        assert method == "GET"
        assert route == "/users/{user_id}"
        assert status_code == 404
        assert duration >= 0

    def test_unmatched_route(self):
        sink = MagicMock()
        app = create_app(telemetry=sink)

        TestClient(app).get("/nope")

        _, route, status_code, _ = sink.record_request.call_args.args
        assert route == "unmatched"
        assert status_code == 404

    def test_records_each_request(self):
        sink = MagicMock()
        app = FastAPI()
        app.add_middleware(RequestMetricsMiddleware, sink=sink)

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        client = TestClient(app)
        client.get("/ping")
        client.get("/ping")

        assert sink.record_request.call_count == 2


class TestTimeoutMiddleware:
    @staticmethod
    def _app(timeout_seconds):
        app = FastAPI()
        app.add_middleware(TimeoutMiddleware, timeout_seconds=timeout_seconds)

        @app.get("/slow")
        async def slow():
            await asyncio.sleep(1)
            return {"ok": True}

        @app.get("/fast")
        async def fast():
            return {"ok": True}

        return app

    def test_slow_request_returns_504(self):
        response = TestClient(self._app(0.05)).get("/slow")

        assert response.status_code == 504
        assert response.json()["error"] == "REQUEST_TIMEOUT"

    def test_fast_request_passes(self):
        response = TestClient(self._app(5)).get("/fast")

        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestBlockingWork:
    @staticmethod
    async def _timed_get(client, path):
        start = time.perf_counter()
        response = await client.get(path)
        return response, time.perf_counter() - start

    @pytest.mark.asyncio
    async def test_blocking_query_times_out_without_stalling_other_requests(self, monkeypatch):
        """A stuck database call yields 504 while unrelated requests keep flowing."""
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0.2")
        get_settings.cache_clear()
        service = UserService(SlowUserRepository(delay=1.5), MagicMock(), "whsec", "s", "c")
        app = create_app(telemetry=MagicMock())
        app.dependency_overrides[get_user_service] = lambda: service

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            (slow, slow_elapsed), (health, health_elapsed) = await asyncio.gather(
                self._timed_get(client, "/users/1"),
                self._timed_get(client, "/health"),
            )

        assert slow.status_code == 504
        assert slow.json()["error"] == "REQUEST_TIMEOUT"
        assert slow_elapsed < 1.0
        assert health.status_code == 200
        assert health_elapsed < 0.5

    @pytest.mark.asyncio
    async def test_blocking_ping_does_not_stall_health(self, monkeypatch):
        """Readiness pings run off the event loop."""
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "0.2")
        get_settings.cache_clear()
        repo = MagicMock()
        repo.ping.side_effect = lambda: time.sleep(1.5) or True
        monkeypatch.setattr("api.routes.health.get_user_repository", lambda: repo)
        app = create_app(telemetry=MagicMock())

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            (ready, _), (health, health_elapsed) = await asyncio.gather(
                self._timed_get(client, "/ready"),
                self._timed_get(client, "/health"),
            )

        assert ready.status_code == 504
        assert health.status_code == 200
        assert health_elapsed < 0.5
