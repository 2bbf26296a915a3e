"""
ScanGate — Pydantic Response Schemas
======================================

What:  Pydantic models defining the JSON contract of GET /testdb.
Why:   Automatic serialization and OpenAPI-quality typing of the two
       response shapes (success / failure) sharing a boolean discriminant.
Who:   Used by the scan route (success) and the exception handlers (failure).

Response shapes:
    200 → {"success": true,  "data": <ScanResult>}
    500 → {"success": false, "error": "Failed to fetch data from DynamoDB"}
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

# A single DynamoDB item as plain JSON values (attribute name → value).
Record = Dict[str, Any]

# The Scan output passed through unmodified: Items, Count, ScannedCount and,
# when the store sends them, LastEvaluatedKey / ConsumedCapacity.
ScanResult = Dict[str, Any]

SCAN_FAILED_MESSAGE = "Failed to fetch data from DynamoDB"


class ScanSuccessResponse(BaseModel):
    """Returned by GET /testdb when the scan completes."""
    success: Literal[True] = True
    data: ScanResult = Field(description="Scan output exactly as returned by the store")


class ScanFailureResponse(BaseModel):
    """
    Returned with HTTP 500 when the scan fails for any reason.

    The error string is fixed; exception details stay in the server log.
    """
    success: Literal[False] = False
    error: str = Field(default=SCAN_FAILED_MESSAGE, description="Generic error message")
