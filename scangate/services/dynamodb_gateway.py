"""
ScanGate — DynamoDB Gateway Implementation
============================================

What:  Concrete TableGateway backed by Amazon DynamoDB through aiobotocore.
Why:   aiobotocore gives a non-blocking DynamoDB client, so a slow scan only
       suspends its own request while the event loop keeps serving others.
How:   One client per process, created lazily (or from the app lifespan),
       one Scan call per request, typed attribute values converted to plain
       JSON values with boto3's TypeDeserializer.
Who:   Constructed by create_app() with the process Settings.
When:  scan_table() runs once per GET /testdb request.

Failure policy:
    Everything that goes wrong while talking to DynamoDB becomes
    ScanFailedError: connect errors, ClientError (ThrottlingException,
    AccessDeniedException, ResourceNotFoundException, ...), BotoCoreError
    (EndpointConnectionError, NoCredentialsError, ...), and anything else.
    The AWS error code is kept in the exception context for the server log.

What this gateway deliberately does NOT do:
    - Retry: botocore's retry handler is limited to a single attempt
    - Paginate: only the first page is returned; LastEvaluatedKey is passed
      through so callers can see that the table was truncated
"""

import asyncio
import base64
import logging
from contextlib import AsyncExitStack
from decimal import Decimal
from typing import Any, Dict, Optional

from aiobotocore.session import get_session
from boto3.dynamodb.types import Binary, TypeDeserializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from scangate.config import Settings
from scangate.exceptions import ScanFailedError
from scangate.schemas.scan import ScanResult
from scangate.services.table_gateway import TableGateway

logger = logging.getLogger(__name__)

# Scan output keys holding typed attribute maps that need deserializing
_ITEM_KEYS = ("Items",)
_KEY_KEYS = ("LastEvaluatedKey",)

# Transport envelope added by botocore; not part of the scan result
_ENVELOPE_KEYS = frozenset({"ResponseMetadata"})


def to_json_value(value: Any) -> Any:
    """
    Convert a value produced by TypeDeserializer into a plain JSON value.

    Conversions:
        Decimal  → int when integral, float otherwise
        set      → sorted list (SS / NS / BS)
        Binary   → base64 string
        bytes    → base64 string
        dict/list → converted recursively
    """
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_json_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(to_json_value(v) for v in value)
    return value


class DynamoDBGateway(TableGateway):
    """
    DynamoDB implementation of TableGateway.

    Attributes:
        settings: Process Settings (region, endpoint override)

    Example:
        >>> gateway = DynamoDBGateway(Settings(aws_region="ap-south-1"))
        >>> result = await gateway.scan_table("my-table")
        >>> result["Items"]
        [{'id': 1, 'name': 'first'}, ...]
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._deserializer = TypeDeserializer()
        self._exit_stack: Optional[AsyncExitStack] = None
        self._client = None
        # Guards lazy connect when the first requests arrive together
        self._connect_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """
        Create the aiobotocore DynamoDB client.

        Raises:
            ScanFailedError: If the client cannot be created
        """
        async with self._connect_lock:
            if self._client is not None:
                return

            client_config: Dict[str, Any] = {
                "region_name": self.settings.aws_region,
                # total_max_attempts=1: the initial call only, no retries
                "config": Config(retries={"total_max_attempts": 1, "mode": "standard"}),
            }
            if self.settings.dynamodb_endpoint_url:
                client_config["endpoint_url"] = self.settings.dynamodb_endpoint_url

            stack = AsyncExitStack()
            try:
                session = get_session()
                self._client = await stack.enter_async_context(
                    session.create_client("dynamodb", **client_config)
                )
            except Exception as e:
                await stack.aclose()
                raise ScanFailedError(
                    table_name=self.settings.table_name,
                    message=f"Failed to create DynamoDB client: {e}",
                    context={"error_type": type(e).__name__},
                ) from e

            self._exit_stack = stack
            logger.info(
                "DynamoDB client ready (region=%s, endpoint=%s)",
                self.settings.aws_region,
                self.settings.dynamodb_endpoint_url or "AWS",
            )

    async def close(self) -> None:
        """Close the DynamoDB client."""
        stack, self._exit_stack = self._exit_stack, None
        self._client = None
        if stack is None:
            return
        try:
            await stack.aclose()
        except Exception as e:
            logger.warning("Error closing DynamoDB client: %s", e)
        logger.info("DynamoDB client closed")

    async def scan_table(self, table_name: str) -> ScanResult:
        if not table_name:
            raise ScanFailedError(
                table_name=table_name,
                message="Refusing to scan: table name is empty",
                context={"error_type": "EmptyTableName"},
            )

        if self._client is None:
            await self.connect()

        try:
            response = await self._client.scan(TableName=table_name)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise ScanFailedError(
                table_name=table_name,
                message=f"DynamoDB rejected scan: {error.get('Message', str(e))}",
                context={
                    "error_code": error.get("Code", ""),
                    "error_type": type(e).__name__,
                },
            ) from e
        except BotoCoreError as e:
            raise ScanFailedError(
                table_name=table_name,
                message=f"DynamoDB unreachable: {e}",
                context={"error_type": type(e).__name__},
            ) from e
        except Exception as e:
            raise ScanFailedError(
                table_name=table_name,
                message=f"Scan failed: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        try:
            result = self._to_scan_result(response)
        except Exception as e:
            raise ScanFailedError(
                table_name=table_name,
                message=f"Could not decode scan output: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        logger.debug(
            "Scanned %s: %d items (LastEvaluatedKey=%s)",
            table_name,
            len(result.get("Items", [])),
            "yes" if "LastEvaluatedKey" in result else "no",
        )
        return result

    def _deserialize_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return {
            name: to_json_value(self._deserializer.deserialize(attr))
            for name, attr in item.items()
        }

    def _to_scan_result(self, response: Dict[str, Any]) -> ScanResult:
        """
        Build the ScanResult from a raw Scan response.

        Items keep their order. Metadata (Count, ScannedCount,
        ConsumedCapacity, ...) is copied unchanged; only the botocore
        envelope is dropped.
        """
        result: ScanResult = {}
        for key, value in response.items():
            if key in _ENVELOPE_KEYS:
                continue
            if key in _ITEM_KEYS:
                result[key] = [self._deserialize_item(item) for item in value]
            elif key in _KEY_KEYS:
                result[key] = self._deserialize_item(value)
            else:
                result[key] = value
        return result
