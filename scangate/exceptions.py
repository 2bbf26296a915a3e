"""
ScanGate — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the gateway and router.
Why:   The router needs ONE signal for "the scan did not work", whatever the
       underlying cause. Custom exceptions carry debug context that is
       logged server-side but never returned to the client.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) turn them into
       `{"success": false, "error": ...}` JSON responses.
Who:   Raised by DynamoDBGateway; caught by the handlers in main.py.

Exception Hierarchy:
    ScanGateError (base)            → 500 Internal Server Error
    └── ScanFailedError             → 500 Internal Server Error
        (connectivity, throttling, access denied, missing table: all
         collapsed into one kind)
"""

from typing import Any, Dict, Optional


class ScanGateError(Exception):
    """
    Base exception for all ScanGate application errors.

    Attributes:
        message:  Error description (logged; the client sees a fixed string)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ScanFailedError(ScanGateError):
    """
    Raised when a table scan against the remote store cannot complete.

    What:    Network error, throttling, permission denial, missing table,
             client setup failure, or any other failure of the remote call.
    HTTP:    500 Internal Server Error, body
             {"success": false, "error": "Failed to fetch data from DynamoDB"}

    The gateway does not try to tell these causes apart for the caller;
    the AWS error code (when there is one) travels in `context` for logs.
    """

    def __init__(
        self,
        table_name: str = "",
        message: str = "Table scan failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["table"] = table_name
        super().__init__(message=message, context=ctx)
        self.table_name = table_name
