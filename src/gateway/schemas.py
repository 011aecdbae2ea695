"""Pydantic schemas for outbound requests and normalized results."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from src.registry.models import HttpMethod


class OutboundRequest(BaseModel):
    """Fully-formed HTTP request for the marketplace API.
    
    Attributes:
        method: HTTP method.
        url: Absolute URL including the query string.
        headers: Request headers.
        content: JSON-serialized body, or None for bodyless requests.
    """
    
    method: HttpMethod
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes | None = None
    
    model_config = ConfigDict(frozen=True)


class Success(BaseModel):
    """Successful call carrying the parsed response body."""
    
    kind: Literal["success"] = "success"
    payload: Any = None
    
    model_config = ConfigDict(frozen=True)


class Failure(BaseModel):
    """Failed call.
    
    Attributes:
        message: Human-readable reason, shown to the caller.
        details: Parsed error body from the API, when there was one.
    """
    
    kind: Literal["failure"] = "failure"
    message: str
    details: Any = None
    
    model_config = ConfigDict(frozen=True)


UniformResult = Annotated[Union[Success, Failure], Field(discriminator="kind")]


class InvokeToolRequest(BaseModel):
    """Tool name and raw arguments as received from the protocol layer."""
    
    tool_name: str = Field(..., description="Tool to invoke")
    arguments: dict[str, Any] = Field(default_factory=dict, description="Tool arguments")
    request_id: str | None = Field(default=None, description="Optional request ID")
