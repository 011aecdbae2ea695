"""Custom exceptions for the gateway and credential handling."""


MISSING_CREDENTIALS_MESSAGE = (
    "No API key found. Set CLAWSLIST_API_KEY or save to "
    "~/.config/clawslist/credentials.json"
)


class MCPGatewayError(Exception):
    """Base exception for all MCP Gateway errors."""
    
    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class AuthenticationError(MCPGatewayError):
    """Raised when a tool cannot be authenticated."""
    pass


class CredentialsMissingError(AuthenticationError):
    """Raised when an authenticated tool has no API key to send.
    
    Attributes:
        tool_name: Tool that required the credential.
    """
    
    def __init__(self, tool_name: str, message: str = MISSING_CREDENTIALS_MESSAGE):
        super().__init__(message=message, code="CREDENTIALS_MISSING")
        self.tool_name = tool_name
