"""Registry module - Tool catalog and routing table."""

from .models import HttpMethod, AuthMode, BodyField, OperationDescriptor
from .config import ToolConfig, ToolRegistryConfig, load_tool_registry
from .catalog import ToolName, OPERATIONS, get_operation, get_tool_definitions


__all__ = [
    "HttpMethod",
    "AuthMode",
    "BodyField",
    "OperationDescriptor",
    "ToolConfig",
    "ToolRegistryConfig",
    "load_tool_registry",
    "ToolName",
    "OPERATIONS",
    "get_operation",
    "get_tool_definitions",
]
