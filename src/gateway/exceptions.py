"""Custom exceptions for the MCP Gateway."""

from src.auth.exceptions import MCPGatewayError


class GatewayError(MCPGatewayError):
    """Base exception for gateway-specific errors."""
    pass


class ToolNotFoundError(GatewayError):
    """Raised when requested tool is not in the catalog.
    
    Attributes:
        tool_name: Name of the tool that was not found.
    """
    
    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Unknown tool: {tool_name}",
            code="TOOL_NOT_FOUND"
        )
        self.tool_name = tool_name


class MissingArgumentError(GatewayError):
    """Raised when an argument needed to build the request is absent.
    
    Attributes:
        tool_name: Tool being invoked.
        argument: Name of the missing argument.
    """
    
    def __init__(self, tool_name: str, argument: str):
        super().__init__(
            message=f"Missing required argument '{argument}' for tool '{tool_name}'",
            code="MISSING_ARGUMENT"
        )
        self.tool_name = tool_name
        self.argument = argument


class InvalidArgumentError(GatewayError):
    """Raised when an argument cannot be placed in the request.
    
    Attributes:
        tool_name: Tool being invoked.
        argument: Name of the offending argument.
    """
    
    def __init__(self, tool_name: str, argument: str, reason: str):
        super().__init__(
            message=f"Invalid argument '{argument}' for tool '{tool_name}': {reason}",
            code="INVALID_ARGUMENT"
        )
        self.tool_name = tool_name
        self.argument = argument
