from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import structlog

from webhook_relay.config import Settings

logger = structlog.get_logger("routing")


def normalize_path_key(key: Any) -> str:
    """Trim whitespace, strip surrounding slashes and lowercase."""

    return str(key or "").strip().strip("/").lower()


def parse_json_routes(raw: str) -> list[tuple[str, str]]:
    if not raw:
        return []

    try:
        obj = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Ignoring malformed route JSON")
        return []

    if not isinstance(obj, dict):
        return []

    return [(key, value) for key, value in obj.items() if isinstance(value, str) and value]


def parse_csv_routes(raw: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for entry in (raw or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        sep = "->" if "->" in entry else "="
        key, _, value = entry.partition(sep)
        value = value.strip()
        if value:
            pairs.append((key, value))
    return pairs


def _apply(routes: dict[str, str], pairs: Iterable[tuple[Any, str]]) -> None:
    for raw_key, value in pairs:
        key = normalize_path_key(raw_key)
        if key and value:
            routes[key] = value


def build_route_table(settings: Settings) -> dict[str, str]:
    """Merge the JSON, CSV and prefixed-variable sources, later ones winning."""

    routes: dict[str, str] = {}
    _apply(routes, parse_json_routes(settings.routes_json))
    _apply(routes, parse_csv_routes(settings.routes_csv))
    _apply(routes, settings.route_targets.items())
    return routes
