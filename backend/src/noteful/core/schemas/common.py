"""
Shared response schemas - errors and health
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error body. ``location`` names the offending field, if any."""

    code: int = Field(description="HTTP status code")
    reason: str = Field(description="Error kind")
    message: str = Field(description="Human-readable error message")
    location: Optional[str] = Field(default=None, description="Offending request field")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": 422,
                "reason": "ValidationError",
                "message": "Must be at least 3 characters long",
                "location": "username",
            }
        }
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

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
