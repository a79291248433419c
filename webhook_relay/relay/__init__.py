from webhook_relay.relay.forwarder import (
    ForwardError,
    ForwardResult,
    RequestContext,
    close_http_client,
    forward,
    get_http_client,
    get_webhook_type,
    set_http_client,
)

__all__ = [
    "ForwardError",
    "ForwardResult",
    "RequestContext",
    "close_http_client",
    "forward",
    "get_http_client",
    "get_webhook_type",
    "set_http_client",
]
