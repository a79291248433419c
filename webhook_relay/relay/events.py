from __future__ import annotations

import structlog

from webhook_relay.relay.forwarder import NO_TARGET_CONFIGURED, ForwardResult, RequestContext

logger = structlog.get_logger("relay")


def log_outcome(ctx: RequestContext, result: ForwardResult) -> None:
    """Emit the single terminal event for a relayed request."""

    if result.failure_reason == NO_TARGET_CONFIGURED:
        logger.error(
            "No target URL configured",
            path=ctx.path,
            requestId=ctx.request_id,
            webhookType=ctx.webhook_type,
        )
        return

    fields = {
        "requestId": ctx.request_id,
        "path": ctx.path,
        "matchedRoute": result.matched_route,
        "method": ctx.method,
        "webhookType": ctx.webhook_type,
        "durationMs": result.duration_ms,
    }

    if result.forwarded:
        logger.info("Received webhook", **fields, targetStatus=result.target_status)
        return

    error = result.error
    logger.error(
        "Forwarding failed",
        **fields,
        error={
            "message": error.message if error else None,
            "code": error.code if error else None,
            "status": error.status if error else result.target_status,
        },
    )
