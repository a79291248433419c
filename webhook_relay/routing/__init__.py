from webhook_relay.routing.credentials import extract_credentials, mask_url_credentials, strip_credentials
from webhook_relay.routing.resolver import ResolvedMatch, resolve_target
from webhook_relay.routing.table import build_route_table, normalize_path_key

__all__ = [
    "ResolvedMatch",
    "build_route_table",
    "extract_credentials",
    "mask_url_credentials",
    "normalize_path_key",
    "resolve_target",
    "strip_credentials",
]
