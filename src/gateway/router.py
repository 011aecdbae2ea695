"""FastAPI router exposing the dispatcher without MCP framing."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Header

from src.registry.catalog import get_tool_definitions
from src.registry.config import ToolConfig

from .schemas import Failure, InvokeToolRequest, Success
from .service import invoke_tool


router = APIRouter(prefix="/mcp", tags=["gateway"])


@router.get("/tools", response_model=list[ToolConfig])
async def list_tools_endpoint() -> list[ToolConfig]:
    """List the static tool catalog."""
    return list(get_tool_definitions())


@router.post("/invoke", response_model=Success | Failure)
async def invoke_tool_endpoint(
    request: InvokeToolRequest,
    x_request_id: Annotated[str | None, Header()] = None,
) -> Success | Failure:
    """Invoke a tool and return the normalized result.
    
    Unlike the MCP transports, the Failure variant keeps the parsed
    API error body in ``details`` for diagnostics.
    
    Args:
        request: Tool name and arguments.
        x_request_id: Optional correlation ID (generated if not provided).
        
    Returns:
        Success or Failure envelope.
    """
    if x_request_id:
        request.request_id = x_request_id
    elif not request.request_id:
        request.request_id = str(uuid.uuid4())
    
    return await invoke_tool(request=request)
