from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog


def get_request_id(scope: dict[str, Any]) -> str:
    state = scope.get("state") or {}
    return state.get("request_id") or str(uuid.uuid4())


class RequestContextMiddleware:
    """Assigns a request id, binds it to the log context and writes access logs."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        structlog.contextvars.bind_contextvars(requestId=request_id)

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            structlog.get_logger("access").info(
                "http_request",
                method=scope.get("method"),
                path=scope.get("path"),
                statusCode=status_code,
                durationMs=round(elapsed_ms, 2),
            )

            structlog.contextvars.clear_contextvars()
