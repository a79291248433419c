from __future__ import annotations

import argparse
import os

import uvicorn

from webhook_relay.config import get_settings
from webhook_relay.observability.logging import configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Relay inbound webhooks to configured targets")
    parser.add_argument("--host", default=None, help="Interface to bind (overrides HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides PORT)")
    args = parser.parse_args(argv)

    # Overrides go through the environment so /config and the startup log see them too.
    if args.host is not None:
        os.environ["HOST"] = args.host
    if args.port is not None:
        os.environ["PORT"] = str(args.port)
    get_settings.cache_clear()
    settings = get_settings()

    configure_logging(settings.log_level)
    uvicorn.run(
        "webhook_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
