"""
ScanGate — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Fails fast if the table name or region is missing, instead of a server
       that boots fine and then fails every request.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and produces one immutable `Settings` object.
Who:   Built by create_app() and handed to the gateway and route dependencies.
When:  Constructed once at startup; never reconfigured while the process runs.

Design Decision:
    There is no module-level `settings` singleton. The app factory builds one
    Settings instance and passes it explicitly:
        create_app() → app.state.settings → DynamoDBGateway(settings)
    Tests construct their own Settings(...) without touching the environment.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide settings loaded from environment variables.

    All settings have defaults matching the original deployment
    (ap-south-1 / my-table / port 8080), so the service starts with no
    configuration at all.
    """

    # ── DynamoDB ──────────────────────────────────────────────────────────
    # What: Region of the table scanned by GET /testdb
    aws_region: str = Field(default="ap-south-1", min_length=1)

    # What: Table scanned by GET /testdb
    # Fixed at startup; clients cannot choose which table is read.
    table_name: str = Field(default="my-table")

    # What: Optional endpoint override (DynamoDB Local, LocalStack)
    # Unset → botocore resolves the regional AWS endpoint.
    dynamodb_endpoint_url: Optional[str] = Field(default=None)

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """DynamoDB table names are 3-255 chars; we only insist on non-blank."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("table_name must be a non-empty identifier")
        return stripped

    @field_validator("dynamodb_endpoint_url")
    @classmethod
    def blank_endpoint_is_none(cls, v: Optional[str]) -> Optional[str]:
        # DYNAMODB_ENDPOINT_URL= in a .env file means "use AWS"
        if v is not None and not v.strip():
            return None
        return v

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests
    # Default "*": every origin may read /testdb responses
    # Format: Comma-separated URLs or "*"
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # TABLE_NAME and table_name both work
        frozen=True,           # no runtime reconfiguration
    )
