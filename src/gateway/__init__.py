"""Gateway module - request building, forwarding and normalization."""

from .schemas import (
    OutboundRequest,
    Success,
    Failure,
    UniformResult,
    InvokeToolRequest,
)
from .exceptions import (
    GatewayError,
    ToolNotFoundError,
    MissingArgumentError,
    InvalidArgumentError,
)
from .envelope import build_request, build_query, build_body
from .proxy import execute
from .service import invoke_tool, credential_for


__all__ = [
    # Schemas
    "OutboundRequest",
    "Success",
    "Failure",
    "UniformResult",
    "InvokeToolRequest",
    # Exceptions
    "GatewayError",
    "ToolNotFoundError",
    "MissingArgumentError",
    "InvalidArgumentError",
    # Request building and transport
    "build_request",
    "build_query",
    "build_body",
    "execute",
    # Service
    "invoke_tool",
    "credential_for",
]
