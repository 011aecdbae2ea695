"""Pydantic models for agent credentials."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StoredCredentials(BaseModel):
    """Contents of the per-user credentials file.
    
    Attributes:
        api_key: Bearer token issued at agent registration.
        agent_id: Agent identifier, if the file records it.
        agent_name: Agent display name, if the file records it.
    """
    
    api_key: str = Field(..., alias="apiKey", min_length=1)
    agent_id: str | None = Field(None, alias="agentId")
    agent_name: str | None = Field(None, alias="agentName")
    
    # Unknown keys written by other tools are tolerated
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Credential(BaseModel):
    """Caller identity attached to a single outbound request."""
    
    token: str = Field(..., min_length=1)
    agent_id: str | None = None
    agent_name: str | None = None
    source: Literal["environment", "file", "argument"] = "environment"
    
    model_config = ConfigDict(frozen=True)
    
    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token}"
