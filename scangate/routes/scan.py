"""
ScanGate — Scan Route Handler
===============================

What:  Handles GET /testdb: scans the configured table and returns it.
Why:   The only endpoint of the service; a smoke test that the process can
       reach its table with its credentials.
How:   Resolves Settings and the TableGateway from app state, calls
       scan_table(settings.table_name), wraps the result in the success body.
Who:   Called by browser clients (CORS is open to every origin).

Request Flow:
    1. No parameters are read from the request
    2. gateway.scan_table(<configured table>)
    3. 200 {"success": true, "data": <ScanResult>}
    4. On any gateway failure (re-raised as ScanFailedError): the global
       handler in main.py responds 500
       {"success": false, "error": "Failed to fetch data from DynamoDB"}
"""

import logging

from fastapi import APIRouter, Depends, Request

from scangate.config import Settings
from scangate.exceptions import ScanFailedError, ScanGateError
from scangate.schemas.scan import ScanFailureResponse, ScanSuccessResponse
from scangate.services.table_gateway import TableGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scan"])


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the Settings built by create_app()."""
    return request.app.state.settings


def get_table_gateway(request: Request) -> TableGateway:
    """FastAPI dependency returning the process-wide TableGateway."""
    return request.app.state.gateway


@router.get(
    "/testdb",
    response_model=ScanSuccessResponse,
    responses={
        200: {"description": "Scan output of the configured table", "model": ScanSuccessResponse},
        500: {"description": "The scan failed", "model": ScanFailureResponse},
    },
    summary="Scan the configured DynamoDB table",
)
async def scan_test_table(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: TableGateway = Depends(get_table_gateway),
) -> ScanSuccessResponse:
    """
    Return the first page of the configured table.

    Any failure of the gateway leaves here as ScanFailedError, so the
    client always gets the same 500 body from the handler in main.py.
    The table name and item count are left on request.state for the
    access log.
    """
    request.state.scanned_table = settings.table_name
    try:
        data = await gateway.scan_table(settings.table_name)
    except ScanGateError:
        raise
    except Exception as e:
        logger.warning("Gateway raised untyped %s; reporting scan failure", type(e).__name__)
        raise ScanFailedError(
            table_name=settings.table_name,
            message=f"Gateway raised {type(e).__name__}: {e}",
            context={"error_type": type(e).__name__},
        ) from e

    request.state.scanned_items = len(data.get("Items", []))
    return ScanSuccessResponse(data=data)
