"""MCP transport module - JSON-RPC over SSE and stdio."""

from .service import handle_message, handle_tools_call, handle_tools_list, render_result
from .sse import router
from .stdio import serve_stdio

__all__ = [
    "handle_message",
    "handle_tools_call",
    "handle_tools_list",
    "render_result",
    "router",
    "serve_stdio",
]
