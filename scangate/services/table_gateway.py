"""
ScanGate — Abstract Table Gateway Interface
=============================================

What:  Abstract base class defining the contract between the HTTP router and
       the remote key-value store.
Why:   The router must not know which client library talks to the store.
       Tests swap in an in-memory double; production uses DynamoDBGateway.
How:   Concrete implementations inherit from TableGateway and implement
       scan_table(), connect() and close().
Who:   Called by the GET /testdb route handler.
When:  Once per request (scan_table); connect/close from the app lifespan.
"""

from abc import ABC, abstractmethod

from scangate.schemas.scan import ScanResult


class TableGateway(ABC):
    """
    Abstract interface for reading a whole table from a remote store.

    Contract:
        - scan_table() issues a single scan and returns its output unchanged
          apart from converting store-typed values to plain JSON values
        - Every failure of the remote call surfaces as ScanFailedError
        - Implementations do not retry and do not follow pagination
    """

    @abstractmethod
    async def scan_table(self, table_name: str) -> ScanResult:
        """
        Read the first page of `table_name`.

        Returns:
            ScanResult: `Items` in store-provided order plus whatever metadata
            the store sent (Count, ScannedCount, LastEvaluatedKey, ...).

        Raises:
            ScanFailedError: On any failure (network, throttling, access
                denied, missing table). The caller cannot tell them apart.
        """
        ...

    async def connect(self) -> None:
        """Open the underlying client. Optional; scan_table may connect lazily."""

    async def close(self) -> None:
        """Release the underlying client. Safe to call more than once."""
