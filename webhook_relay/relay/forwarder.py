from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any

import httpx

from webhook_relay.config import get_settings
from webhook_relay.routing.credentials import extract_credentials, strip_credentials
from webhook_relay.routing.resolver import ResolvedMatch

RELAY_NAME = "webhook-relayer"
DEFAULT_CONTENT_TYPE = "application/json"
MAX_OUTBOUND_BODY_BYTES = 10 * 1024 * 1024

NO_TARGET_CONFIGURED = "no_target_configured"
FORWARDING_FAILED = "forwarding_failed"

_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (httpx.TimeoutException, "timeout"),
    (httpx.ConnectError, "connect_error"),
    (httpx.RemoteProtocolError, "protocol_error"),
    (httpx.UnsupportedProtocol, "invalid_url"),
    (httpx.InvalidURL, "invalid_url"),
)

_http_client: httpx.AsyncClient | None = None


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    method: str
    path: str
    body: bytes
    content_type: str | None
    webhook_type: str
    received_at: float


@dataclass(frozen=True)
class ForwardError:
    message: str
    code: str
    status: int = 0


@dataclass(frozen=True)
class ForwardResult:
    forwarded: bool
    matched_route: str = ""
    target_url: str | None = None
    target_status: int = 0
    failure_reason: str | None = None
    error: ForwardError | None = None
    duration_ms: int = 0


def set_http_client(client: httpx.AsyncClient | None) -> None:
    global _http_client
    _http_client = client


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(follow_redirects=True)
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def get_webhook_type(body: Any) -> str:
    """Comma-joined ``type`` of each entry in ``body["events"]``, else ``unknown``."""

    if isinstance(body, dict):
        events = body.get("events")
        if isinstance(events, list) and events:
            types = [event.get("type") if isinstance(event, dict) else None for event in events]
            return ",".join("" if t is None else str(t) for t in types)
    return "unknown"


def _elapsed_ms(ctx: RequestContext) -> int:
    return int((perf_counter() - ctx.received_at) * 1000)


def _error_code(exc: Exception) -> str:
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return type(exc).__name__


def _outbound_headers(ctx: RequestContext) -> dict[str, str]:
    return {
        "content-type": ctx.content_type or DEFAULT_CONTENT_TYPE,
        "x-request-id": ctx.request_id,
        "x-relayed-by": RELAY_NAME,
    }


async def forward(ctx: RequestContext, match: ResolvedMatch) -> ForwardResult:
    """Send the request to the matched target, once.

    Never raises: every outcome, including transport failures, is reported as
    a ``ForwardResult``. Destination error statuses count as a completed forward.
    """

    if match.target_url is None:
        return ForwardResult(forwarded=False, failure_reason=NO_TARGET_CONFIGURED, duration_ms=_elapsed_ms(ctx))

    target_url = match.target_url
    if len(ctx.body) > MAX_OUTBOUND_BODY_BYTES:
        return ForwardResult(
            forwarded=False,
            matched_route=match.matched_key,
            target_url=target_url,
            failure_reason=FORWARDING_FAILED,
            error=ForwardError(
                message=f"Request body exceeds {MAX_OUTBOUND_BODY_BYTES} bytes",
                code="body_too_large",
            ),
            duration_ms=_elapsed_ms(ctx),
        )

    settings = get_settings()
    client = get_http_client()

    try:
        response = await client.request(
            ctx.method,
            strip_credentials(target_url),
            content=ctx.body,
            headers=_outbound_headers(ctx),
            auth=extract_credentials(target_url),
            timeout=settings.target_timeout_seconds,
        )
    except Exception as exc:  # noqa: BLE001
        return ForwardResult(
            forwarded=False,
            matched_route=match.matched_key,
            target_url=target_url,
            failure_reason=FORWARDING_FAILED,
            error=ForwardError(message=str(exc) or type(exc).__name__, code=_error_code(exc)),
            duration_ms=_elapsed_ms(ctx),
        )

    return ForwardResult(
        forwarded=True,
        matched_route=match.matched_key,
        target_url=target_url,
        target_status=response.status_code,
        duration_ms=_elapsed_ms(ctx),
    )
