"""
Shared response schemas - messages, errors, health
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Plain confirmation body."""

    message: str = Field(description="Human-readable message")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    message: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "Note not found"}}
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: Dict[str, Dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {"database": {"status": "healthy", "response_time_ms": 15}},
            }
        }
    )
