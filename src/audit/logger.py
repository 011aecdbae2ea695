"""Structured audit logging for tool invocations."""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog

from .schemas import AuditEvent, AuditStatus

logger = structlog.get_logger("audit")


class AuditContext:
    """Tracks timing and outcome of one tool invocation.
    
    Attributes:
        request_id: Correlation ID for tracing.
        tool_name: Which tool is being invoked.
        start_time: When the invocation started.
        status: Final status of the invocation.
        error_code: Error code if failed.
        authenticated: Whether a credential was attached.
    """
    
    def __init__(self, request_id: str, tool_name: str) -> None:
        self.request_id = request_id
        self.tool_name = tool_name
        self.start_time = time.perf_counter()
        self.status = AuditStatus.success
        self.error_code: str | None = None
        self.authenticated = False
    
    def mark_error(self, error_code: str, status: AuditStatus = AuditStatus.error) -> None:
        """Mark the invocation as failed.
        
        Args:
            error_code: The error code to record.
            status: More specific failure status, if known.
        """
        self.status = status
        self.error_code = error_code
    
    def mark_authenticated(self) -> None:
        self.authenticated = True
    
    @property
    def duration_ms(self) -> int:
        """Calculate duration in milliseconds."""
        elapsed = time.perf_counter() - self.start_time
        return int(elapsed * 1000)
    
    def to_event(self) -> AuditEvent:
        return AuditEvent(
            request_id=self.request_id,
            tool_name=self.tool_name,
            status=self.status,
            duration_ms=self.duration_ms,
            error_code=self.error_code,
            authenticated=self.authenticated,
        )


def log_tool_invocation(context: AuditContext) -> AuditEvent:
    """Emit the audit event for a finished invocation.
    
    Args:
        context: Audit context with invocation details.
        
    Returns:
        The event that was logged.
    """
    event = context.to_event()
    log = logger.warning if event.status != AuditStatus.success else logger.info
    log("tool_invocation", **event.model_dump(mode="json"))
    return event


@asynccontextmanager
async def audit_tool_invocation(
    request_id: str,
    tool_name: str,
) -> AsyncGenerator[AuditContext, None]:
    """Context manager for auditing tool invocations.
    
    Automatically tracks timing and logs when the context exits.
    
    Args:
        request_id: Correlation ID for tracing.
        tool_name: Which tool is being invoked.
        
    Yields:
        AuditContext for marking status/errors.
        
    Example:
        async with audit_tool_invocation(req_id, tool) as ctx:
            result = await do_work()
            if isinstance(result, Failure):
                ctx.mark_error("API_ERROR")
    """
    context = AuditContext(request_id, tool_name)
    try:
        yield context
    finally:
        log_tool_invocation(context)
