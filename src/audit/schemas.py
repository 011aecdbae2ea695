"""Pydantic schemas for audit logging."""

from enum import Enum

from pydantic import BaseModel, Field


class AuditStatus(str, Enum):
    """Outcome of a tool invocation."""
    
    success = "success"
    error = "error"
    transport_error = "transport_error"
    auth_required = "auth_required"
    not_found = "not_found"


class AuditEvent(BaseModel):
    """Structured record emitted for every tool invocation.
    
    Attributes:
        request_id: Correlation ID for tracing.
        tool_name: Which tool was invoked.
        status: Outcome of the invocation.
        duration_ms: Call duration in milliseconds.
        error_code: Error code if failed.
        authenticated: Whether a credential was attached.
    """
    
    request_id: str
    tool_name: str
    status: AuditStatus
    duration_ms: int = Field(ge=0)
    error_code: str | None = None
    authenticated: bool = False
