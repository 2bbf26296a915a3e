"""
ScanGate — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn scangate.main:app)
       and by tests with their own Settings / fake gateway.
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────────┐   ┌──────────────────────┐    │
    │  │    Open CORS     │ → │  Access Log + Req ID │    │
    │  └──────────────────┘   └──────────────────────┘    │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐                                   │
    │  │ GET /testdb  │ → TableGateway.scan_table()       │
    │  └──────────────┘                                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ScanFailedError→500 │ ScanGateError→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the gateway client (a failure here is logged, not fatal;
       the gateway reconnects lazily on the next scan)

    The "running on port" confirmation line is logged by the server in
    scangate.__main__ once the socket is bound, not here.

    Shutdown:
    1. Close the gateway client
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from scangate.config import Settings
from scangate.exceptions import ScanFailedError, ScanGateError
from scangate.middleware.cors import OpenCORSMiddleware
from scangate.middleware.access_log import AccessLogMiddleware, request_id_var
from scangate.routes import scan
from scangate.schemas.scan import SCAN_FAILED_MESSAGE, ScanFailureResponse
from scangate.services.dynamodb_gateway import DynamoDBGateway
from scangate.services.table_gateway import TableGateway

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called from the lifespan and from the CLI entry point; force=True makes
    the second call a harmless reset.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # botocore logs every request at DEBUG; uvicorn.access duplicates ours
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("aiobotocore").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the gateway on startup, close it on shutdown."""
    settings: Settings = app.state.settings
    gateway: TableGateway = app.state.gateway

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info(
        "ScanGate starting: table=%s region=%s",
        settings.table_name,
        settings.aws_region,
    )

    try:
        await gateway.connect()
    except ScanGateError as e:
        # Not fatal: /testdb answers 500 until the store becomes reachable
        logger.error("Could not open table gateway: %s | Context: %s", e.message, e.context)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ScanGate shutting down...")
    await gateway.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for the failure body.

    Handler hierarchy:
        ScanFailedError       → 500 {"success": false, "error": "Failed to fetch data from DynamoDB"}
        ScanGateError (base)  → 500 same body
        Exception (fallback)  → 500 same body, stack trace logged

    The scan route already wraps anything its gateway raises in
    ScanFailedError; the fallback covers bugs outside the gateway call.
    Starlette serves the fallback from ServerErrorMiddleware, which sits
    outside the user middleware, so that one response has no CORS header.

    Security: handlers NEVER put exception messages or AWS error codes in
    the response. Details are logged server-side with the request ID.
    """

    @app.exception_handler(ScanFailedError)
    async def handle_scan_failed(request: Request, exc: ScanFailedError):
        rid = request_id_var.get("")
        logger.error("[%s] Scan failed: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=ScanFailureResponse(error=SCAN_FAILED_MESSAGE).model_dump(),
        )

    @app.exception_handler(ScanGateError)
    async def handle_gateway_error(request: Request, exc: ScanGateError):
        rid = request_id_var.get("")
        logger.error("[%s] Gateway error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=ScanFailureResponse(error=SCAN_FAILED_MESSAGE).model_dump(),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; stack trace is logged server-side ONLY."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ScanFailureResponse(error=SCAN_FAILED_MESSAGE).model_dump(),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[TableGateway] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Process configuration. Read from the environment when omitted.
        gateway:  Table gateway. A DynamoDBGateway built from `settings`
                  when omitted; tests pass an in-memory double.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or Settings()
    gateway = gateway or DynamoDBGateway(settings)

    app = FastAPI(
        title="ScanGate API",
        description="Scans a DynamoDB table and returns its items as JSON.",
        version="1.0.0",
        # /testdb is the only route; no docs endpoints
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gateway = gateway

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # Open CORS → Access Log → route. CORS is outermost so error
    # responses from the handlers get the headers too.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(
        OpenCORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,  # "*" origin and credentials do not mix
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(scan.router)

    return app


# uvicorn expects `scangate.main:app` to be importable
app = create_app()
