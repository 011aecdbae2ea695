"""Credential resolution for authenticated marketplace tools.

The API key comes from the ``CLAWSLIST_API_KEY`` environment variable
when set, otherwise from the credentials file. Every call re-reads both
sources; nothing is cached between invocations.
"""

from pathlib import Path

import structlog
from pydantic import ValidationError

from src.config import CredentialSettings

from .models import Credential, StoredCredentials

logger = structlog.get_logger("auth")


def read_credentials_file(path: Path) -> StoredCredentials | None:
    """Parse the credentials file at ``path``.
    
    Args:
        path: Location of the JSON credentials file.
        
    Returns:
        Parsed credentials, or None if the file is absent, unreadable,
        not valid JSON, or lacks a non-empty ``apiKey``.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("credentials_file_unreadable", path=str(path), reason=str(e))
        return None

    try:
        return StoredCredentials.model_validate_json(content)
    except ValidationError as e:
        logger.warning("credentials_file_invalid", path=str(path), errors=e.error_count())
        return None


def resolve_credential() -> Credential | None:
    """Resolve the caller's credential for one invocation.
    
    Returns:
        The environment token if non-empty, else the file token, else None.
    """
    settings = CredentialSettings()

    if settings.CLAWSLIST_API_KEY:
        return Credential(token=settings.CLAWSLIST_API_KEY, source="environment")

    stored = read_credentials_file(settings.CLAWSLIST_CREDENTIALS_PATH.expanduser())
    if stored is None:
        return None

    return Credential(
        token=stored.api_key,
        agent_id=stored.agent_id,
        agent_name=stored.agent_name,
        source="file",
    )


def get_api_key() -> str | None:
    """Convenience accessor for the resolved token."""
    credential = resolve_credential()
    return credential.token if credential else None


def has_credentials() -> bool:
    return resolve_credential() is not None
