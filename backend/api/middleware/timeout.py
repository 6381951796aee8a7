"""
Request timeout middleware.

Abandons requests that run longer than the configured limit and answers
504 instead.
"""

import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class TimeoutMiddleware:
    """
    Fail requests that exceed timeout_seconds with 504 Gateway Timeout.

    The downstream app is cancelled at the deadline. Blocking work that
    was handed to a worker thread keeps running there, but the request
    no longer waits for it.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float):
        self.app = app
        self._timeout = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %.1fs: %s %s",
                self._timeout,
                scope["method"],
                scope["path"],
            )
            # Headers already sent: the client sees a truncated response
            if response_started:
                return
            response = JSONResponse(
                status_code=504,
                content={
                    "error": "REQUEST_TIMEOUT",
                    "message": "Request timed out",
                    "details": {},
                },
            )
            await response(scope, receive, send)
