"""Pydantic schemas for MCP protocol messages."""

from typing import Any, Literal
from pydantic import BaseModel, Field


class MCPInitializeParams(BaseModel):
    """Parameters for initialize request."""
    
    protocolVersion: str | None = Field(default=None, description="MCP protocol version")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: dict[str, Any] = Field(default_factory=dict)


class MCPTool(BaseModel):
    """MCP tool definition."""
    
    name: str
    description: str
    inputSchema: dict[str, Any]


class MCPToolListResult(BaseModel):
    """Result for tools/list."""
    
    tools: list[MCPTool]


class MCPToolCallParams(BaseModel):
    """Parameters for tools/call."""
    
    name: str
    arguments: dict[str, Any] | None = Field(default_factory=dict)


class MCPContent(BaseModel):
    """Content item in tool response."""
    
    type: Literal["text"] = "text"
    text: str


class MCPToolCallResult(BaseModel):
    """Result for tools/call."""
    
    content: list[MCPContent]
    isError: bool = False


class MCPJSONRPCRequest(BaseModel):
    """Generic JSON-RPC 2.0 request."""
    
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    method: str
    params: dict[str, Any] | None = None


class MCPJSONRPCResponse(BaseModel):
    """Generic JSON-RPC 2.0 response."""
    
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Any | None = None
    error: dict[str, Any] | None = None


class MCPErrorCodes:
    """Standard JSON-RPC error codes."""
    
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def jsonrpc_result(request_id: str | int | None, result: Any) -> MCPJSONRPCResponse:
    return MCPJSONRPCResponse(id=request_id, result=result)


def jsonrpc_error(request_id: str | int | None, code: int, message: str) -> MCPJSONRPCResponse:
    return MCPJSONRPCResponse(id=request_id, error={"code": code, "message": message})


def to_wire(response: MCPJSONRPCResponse) -> dict[str, Any]:
    """Serialize a response with exactly one of ``result`` or ``error``."""
    data = response.model_dump()
    if response.error is not None:
        data.pop("result")
    else:
        data.pop("error")
        if data["result"] is None:
            data["result"] = {}
    return data
