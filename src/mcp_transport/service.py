"""Business logic for MCP protocol handlers."""

import json
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from src.config import get_settings
from src.gateway.schemas import Failure, InvokeToolRequest, UniformResult
from src.gateway.service import invoke_tool
from src.registry.catalog import get_tool_definitions

from .schemas import (
    MCPContent,
    MCPErrorCodes,
    MCPInitializeParams,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPTool,
    MCPToolCallParams,
    MCPToolCallResult,
    MCPToolListResult,
    jsonrpc_error,
    jsonrpc_result,
)

logger = structlog.get_logger("mcp")


async def handle_initialize(params: MCPInitializeParams) -> dict[str, Any]:
    """Handle initialize request.
    
    Args:
        params: Initialize parameters from client.
        
    Returns:
        Server initialization response.
    """
    settings = get_settings()
    return {
        "protocolVersion": params.protocolVersion or settings.MCP_PROTOCOL_VERSION,
        "capabilities": {
            "tools": {
                "listChanged": False  # Static catalog
            }
        },
        "serverInfo": {
            "name": settings.SERVER_NAME,
            "version": settings.SERVER_VERSION,
        }
    }


def handle_tools_list() -> MCPToolListResult:
    """Handle tools/list request with the static catalog."""
    return MCPToolListResult(
        tools=[
            MCPTool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in get_tool_definitions()
        ]
    )


def render_result(result: UniformResult) -> MCPToolCallResult:
    """Render a normalized result as MCP text content.
    
    Success payloads become indented JSON; failures become
    ``Error: <message>``. Failure details are not rendered.
    """
    if isinstance(result, Failure):
        return MCPToolCallResult(
            content=[MCPContent(text=f"Error: {result.message}")],
            isError=True,
        )
    return MCPToolCallResult(
        content=[MCPContent(text=json.dumps(result.payload, indent=2, ensure_ascii=False))],
        isError=False,
    )


async def handle_tools_call(
    name: str,
    arguments: dict[str, Any] | None = None,
    client: httpx.AsyncClient | None = None,
    request_id: str | None = None,
) -> MCPToolCallResult:
    """Handle tools/call request.
    
    Args:
        name: Tool name to invoke.
        arguments: Tool arguments.
        client: Optional HTTP client for the marketplace API.
        request_id: Optional correlation ID.
        
    Returns:
        Tool execution result.
    """
    request = InvokeToolRequest(
        tool_name=name,
        arguments=arguments or {},
        request_id=request_id,
    )
    result = await invoke_tool(request=request, client=client)
    return render_result(result)


def _request_id(payload: Any) -> str | int | None:
    if isinstance(payload, dict):
        value = payload.get("id")
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return value
    return None


async def handle_message(
    payload: Any,
    client: httpx.AsyncClient | None = None,
) -> MCPJSONRPCResponse | None:
    """Dispatch one decoded JSON-RPC message.
    
    Args:
        payload: Decoded JSON message.
        client: Optional HTTP client passed through to tool calls.
        
    Returns:
        The response to send, or None for notifications.
    """
    request_id = _request_id(payload)
    try:
        jsonrpc_request = MCPJSONRPCRequest.model_validate(payload)
    except ValidationError:
        return jsonrpc_error(request_id, MCPErrorCodes.INVALID_REQUEST, "Invalid Request")

    method = jsonrpc_request.method
    params = jsonrpc_request.params or {}
    is_notification = isinstance(payload, dict) and "id" not in payload

    try:
        if method == "initialize":
            try:
                init_params = MCPInitializeParams.model_validate(params)
            except ValidationError as e:
                return jsonrpc_error(
                    jsonrpc_request.id,
                    MCPErrorCodes.INVALID_PARAMS,
                    f"Invalid params: {e.error_count()} validation error(s)",
                )
            result = await handle_initialize(init_params)
            return jsonrpc_result(jsonrpc_request.id, result)

        elif method.startswith("notifications/") or is_notification:
            # Client-side notifications need no reply
            return None

        elif method == "ping":
            return jsonrpc_result(jsonrpc_request.id, {})

        elif method == "tools/list":
            result = handle_tools_list()
            return jsonrpc_result(jsonrpc_request.id, result.model_dump())

        elif method == "tools/call":
            try:
                call_params = MCPToolCallParams.model_validate(params)
            except ValidationError as e:
                return jsonrpc_error(
                    jsonrpc_request.id,
                    MCPErrorCodes.INVALID_PARAMS,
                    f"Invalid params: {e.error_count()} validation error(s)",
                )
            result = await handle_tools_call(
                name=call_params.name,
                arguments=call_params.arguments,
                client=client,
                request_id=str(jsonrpc_request.id) if jsonrpc_request.id is not None else None,
            )
            return jsonrpc_result(jsonrpc_request.id, result.model_dump())

        else:
            return jsonrpc_error(
                jsonrpc_request.id,
                MCPErrorCodes.METHOD_NOT_FOUND,
                f"Method not found: {method}",
            )

    except Exception as e:
        logger.error("internal_error", method=method, error=str(e), exc_info=True)
        return jsonrpc_error(
            jsonrpc_request.id,
            MCPErrorCodes.INTERNAL_ERROR,
            f"Internal error: {str(e)}",
        )
