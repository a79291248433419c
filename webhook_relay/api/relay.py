from __future__ import annotations

import json
from time import perf_counter
from typing import Any

import structlog
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from webhook_relay.config import get_settings
from webhook_relay.models.schemas import RelayResponse
from webhook_relay.observability.middleware import get_request_id
from webhook_relay.relay.events import log_outcome
from webhook_relay.relay.forwarder import RequestContext, forward, get_webhook_type
from webhook_relay.routing.credentials import mask_url_credentials
from webhook_relay.routing.resolver import resolve_target
from webhook_relay.routing.table import build_route_table, normalize_path_key

MAX_INBOUND_BODY_BYTES = 1024 * 1024
RELAY_PATH = "/{path:path}"

logger = structlog.get_logger("relay")


def _is_json(content_type: str | None) -> bool:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def parse_json_body(body: bytes, content_type: str | None) -> Any:
    if not body or not _is_json(content_type):
        return None
    try:
        return json.loads(body)
    except ValueError:
        # Unparsable payloads are still forwarded verbatim.
        return None


async def _read_body(request: Request) -> bytes:
    """Read the body, stopping as soon as it grows past the inbound cap."""

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_INBOUND_BODY_BYTES:
        raise HTTPException(status_code=413, detail="Request body too large")

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > MAX_INBOUND_BODY_BYTES:
            raise HTTPException(status_code=413, detail="Request body too large")
        chunks.append(chunk)
    return b"".join(chunks)


async def relay(request: Request) -> JSONResponse:
    """Catch-all endpoint, mounted without a method filter so every verb is relayed."""

    received_at = perf_counter()
    body = await _read_body(request)
    content_type = request.headers.get("content-type")

    ctx = RequestContext(
        request_id=get_request_id(request.scope),
        method=request.method,
        path=normalize_path_key(request.url.path),
        body=body,
        content_type=content_type,
        webhook_type=get_webhook_type(parse_json_body(body, content_type)),
        received_at=received_at,
    )

    match = resolve_target(build_route_table(get_settings()), ctx.path)
    logger.debug(
        "Resolved route",
        matchedKey=match.matched_key,
        targetUrl=mask_url_credentials(match.target_url) if match.target_url else None,
    )

    result = await forward(ctx, match)
    log_outcome(ctx, result)
    payload = RelayResponse.from_result(result).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(payload, status_code=200)
