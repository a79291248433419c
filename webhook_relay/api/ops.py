from __future__ import annotations

from fastapi import APIRouter, Response

from webhook_relay.config import get_settings
from webhook_relay.models.schemas import ConfigResponse, ReadyResponse
from webhook_relay.routing.credentials import mask_url_credentials
from webhook_relay.routing.table import build_route_table

router = APIRouter(tags=["ops"])


@router.get("/ready", response_model=ReadyResponse)
async def ready(response: Response) -> ReadyResponse:
    routes = build_route_table(get_settings())
    if not routes:
        response.status_code = 503
        return ReadyResponse(ready=False, routes=[])
    return ReadyResponse(ready=True, routes=list(routes))


@router.get("/config", response_model=ConfigResponse)
async def config() -> ConfigResponse:
    settings = get_settings()
    routes = build_route_table(settings)
    return ConfigResponse(
        port=settings.port,
        routes={key: mask_url_credentials(url) for key, url in routes.items()},
        timeout_ms=settings.target_timeout_ms,
    )
