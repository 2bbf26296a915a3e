"""
scangate.__main__ - CLI entry point

Usage:
    python -m scangate --port 8080 --log-level INFO
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from scangate.config import Settings
from scangate.main import create_app, setup_logging

logger = logging.getLogger("scangate.main")


class ScanGateServer(uvicorn.Server):
    """uvicorn server that confirms the port once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        # uvicorn only sets `started` after a successful bind
        if self.started:
            logger.info("Backend app running on port %d", self.config.port)


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and serve the app with uvicorn."""
    settings = Settings()

    parser = argparse.ArgumentParser(
        prog="scangate",
        description="Serve GET /testdb, a JSON view of one DynamoDB table",
    )
    parser.add_argument(
        "--host",
        default=settings.backend_host,
        help=f"Interface to bind (default: {settings.backend_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.backend_port,
        help=f"Port to listen on (default: {settings.backend_port})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level (default: {settings.log_level})",
    )

    args = parser.parse_args(argv)

    settings = settings.model_copy(
        update={
            "backend_host": args.host,
            "backend_port": args.port,
            "log_level": args.log_level,
        }
    )
    setup_logging(settings)

    config = uvicorn.Config(
        create_app(settings),
        host=settings.backend_host,
        port=settings.backend_port,
        log_config=None,  # keep our logging setup
    )
    try:
        ScanGateServer(config).run()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
