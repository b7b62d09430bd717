"""
DevConnect Backend — Shared Response Schemas
==============================================

What:  Response shapes shared by every resource: errors, plain messages, health.
Why:   Clients need one consistent structure to parse errors programmatically.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: Optional[str] = Field(default=None, description="Request field that failed validation")
    msg: str = Field(description="Human-readable reason")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        msg: Human-readable description for display to users
        errors: Field-level problems (validation errors only)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "msg": "Post not found",
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    msg: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None, description="Field-level errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    msg: str


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
