"""SSE transport implementation for MCP protocol."""

import asyncio
import json

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse

from .schemas import MCPErrorCodes, jsonrpc_error, to_wire
from .service import handle_message


router = APIRouter(prefix="", tags=["mcp-sse"])
KEEPALIVE_SECONDS = 30


@router.get("/sse", operation_id="sse_endpoint_get")
async def sse_get_endpoint(request: Request) -> StreamingResponse:
    """Establish SSE stream and send endpoint info."""
    async def event_stream():
        # Send endpoint configuration
        message_endpoint = f"{request.url.scheme}://{request.url.netloc}/sse"
        yield f"event: endpoint\ndata: {message_endpoint}\n\n"

        # Keep connection alive
        try:
            while True:
                await asyncio.sleep(KEEPALIVE_SECONDS)
                yield ": ping\n\n"
        except asyncio.CancelledError:
            pass

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )


@router.post("/sse", operation_id="sse_endpoint_post")
async def sse_post_endpoint(request: Request) -> Response:
    """Handle JSON-RPC 2.0 messages."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(
            content=to_wire(jsonrpc_error(None, MCPErrorCodes.PARSE_ERROR, "Parse error"))
        )

    response = await handle_message(body)
    if response is None:
        # Notification acknowledged
        return Response(status_code=202)
    return JSONResponse(content=to_wire(response))
