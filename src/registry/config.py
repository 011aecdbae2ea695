"""Static tool metadata loader."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_REGISTRY_PATH = Path(__file__).parent / "tools.yaml"


class ToolConfig(BaseModel):
    """Tool definition advertised to MCP clients."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


class ToolRegistryConfig(BaseModel):
    """Container for tool definitions."""

    tools: list[ToolConfig] = Field(default_factory=list)


def load_tool_registry(config_path: str | Path | None = None) -> ToolRegistryConfig:
    """Load tool metadata from YAML.

    Args:
        config_path: Optional custom path; defaults to the packaged
            ``tools.yaml``.

    Returns:
        Parsed ToolRegistryConfig, or an empty config if the file is missing.
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_REGISTRY_PATH

    if not config_path.exists():
        return ToolRegistryConfig()

    with config_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return ToolRegistryConfig(**data)
