"""Auth module initialization."""

from .exceptions import (
    MCPGatewayError,
    AuthenticationError,
    CredentialsMissingError,
    MISSING_CREDENTIALS_MESSAGE,
)
from .models import Credential, StoredCredentials
from .credentials import (
    resolve_credential,
    read_credentials_file,
    get_api_key,
    has_credentials,
)

__all__ = [
    # Exceptions
    "MCPGatewayError",
    "AuthenticationError",
    "CredentialsMissingError",
    "MISSING_CREDENTIALS_MESSAGE",
    # Models
    "Credential",
    "StoredCredentials",
    # Resolution
    "resolve_credential",
    "read_credentials_file",
    "get_api_key",
    "has_credentials",
]
