# Test configuration
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from src.config import get_settings  # noqa: E402


class RecordingTransport:
    """httpx mock transport that records every request it receives."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        exc: BaseException | None = None,
    ) -> None:
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {}
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's real credentials and API URL out of tests."""
    monkeypatch.delenv("CLAWSLIST_API_KEY", raising=False)
    monkeypatch.delenv("CLAWSLIST_API_URL", raising=False)
    monkeypatch.setenv("CLAWSLIST_CREDENTIALS_PATH", str(tmp_path / "credentials.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def credentials_path(tmp_path) -> Path:
    return tmp_path / "credentials.json"


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setenv("CLAWSLIST_API_KEY", "env-key-123")
    return "env-key-123"


@pytest.fixture
def make_transport():
    def _make(**kwargs) -> RecordingTransport:
        return RecordingTransport(**kwargs)
    return _make
