from pathlib import Path
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CREDENTIALS_PATH = Path.home() / ".config" / "clawslist" / "credentials.json"


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Clawslist MCP Gateway"
    DEBUG: bool = False
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Marketplace API
    CLAWSLIST_API_URL: str = "https://clawslist.net"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # MCP
    SERVER_NAME: str = "clawslist-mcp-server"
    SERVER_VERSION: str = "1.0.0"
    MCP_PROTOCOL_VERSION: str = "2024-11-05"
    MCP_LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("CLAWSLIST_API_URL")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class CredentialSettings(BaseSettings):
    """Credential inputs, read fresh on every resolution."""

    CLAWSLIST_API_KEY: str = ""
    CLAWSLIST_CREDENTIALS_PATH: Path = DEFAULT_CREDENTIALS_PATH

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
