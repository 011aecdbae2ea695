"""Operation descriptors binding tool names to marketplace endpoints."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

_PATH_PARAM = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class HttpMethod(str, Enum):
    """HTTP methods used by the marketplace API."""
    
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class AuthMode(str, Enum):
    """Where an operation's bearer token comes from."""
    
    none = "none"
    resolved = "resolved"
    argument = "argument"


class BodyField(BaseModel):
    """One top-level key of a JSON request body.
    
    Attributes:
        name: Argument name copied into the body under the same key.
        keys: When set, the argument is an object and only these keys
            are forwarded.
    """
    
    name: str
    keys: tuple[str, ...] | None = None
    
    model_config = ConfigDict(frozen=True)


class OperationDescriptor(BaseModel):
    """Static routing entry for one tool.
    
    Attributes:
        name: Tool name, unique within the catalog.
        method: HTTP method.
        path: Path template; ``{param}`` placeholders are filled from
            the tool arguments.
        auth: Credential source for the request.
        auth_argument: Argument holding the token when ``auth`` is
            ``argument``.
        query_params: Optional query parameters, in declaration order.
        body_fields: Body keys; an empty tuple means no request body.
    """
    
    name: str
    method: HttpMethod
    path: str
    auth: AuthMode = AuthMode.none
    auth_argument: str | None = None
    query_params: tuple[str, ...] = ()
    body_fields: tuple[BodyField, ...] = ()
    
    model_config = ConfigDict(frozen=True)
    
    @model_validator(mode="after")
    def _check_auth_argument(self) -> "OperationDescriptor":
        if (self.auth == AuthMode.argument) != bool(self.auth_argument):
            raise ValueError("auth_argument must be set exactly when auth is 'argument'")
        return self
    
    @property
    def requires_auth(self) -> bool:
        return self.auth != AuthMode.none
    
    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(_PATH_PARAM.findall(self.path))
    
    @property
    def has_body(self) -> bool:
        return bool(self.body_fields)
