import structlog
from fastapi import FastAPI

from webhook_relay import __version__
from webhook_relay.api.ops import router as ops_router
from webhook_relay.api.relay import RELAY_PATH, relay
from webhook_relay.config import get_settings
from webhook_relay.models.schemas import HealthResponse
from webhook_relay.observability.logging import configure_logging
from webhook_relay.observability.middleware import RequestContextMiddleware
from webhook_relay.relay.forwarder import close_http_client

logger = structlog.get_logger("server")

# Docs routes are disabled so every path other than the ops endpoints is relayed.
app = FastAPI(title="Webhook Relay", version=__version__, docs_url=None, redoc_url=None, openapi_url=None)
app.add_middleware(RequestContextMiddleware)
app.include_router(ops_router)


@app.on_event("startup")
async def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server started", port=settings.port)


@app.on_event("shutdown")
async def _shutdown() -> None:
    await close_http_client()


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


# Catch-all for every method; must be registered after every other route.
app.add_route(RELAY_PATH, relay, include_in_schema=False)
