"""Tests for credential resolution."""

import json

import pytest

from src.auth.credentials import (
    get_api_key,
    has_credentials,
    read_credentials_file,
    resolve_credential,
)
from src.auth.models import Credential


def _write(path, data) -> None:
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")


class TestResolveCredential:
    """Precedence and fallbacks of resolve_credential."""

    def test_no_sources_returns_none(self):
        assert resolve_credential() is None
        assert get_api_key() is None
        assert has_credentials() is False

    def test_environment_token_used_verbatim(self, monkeypatch):
        monkeypatch.setenv("CLAWSLIST_API_KEY", "  not-validated  ")
        credential = resolve_credential()
        assert credential == Credential(token="  not-validated  ", source="environment")

    def test_empty_environment_token_falls_back_to_file(self, monkeypatch, credentials_path):
        monkeypatch.setenv("CLAWSLIST_API_KEY", "")
        _write(credentials_path, {"apiKey": "file-key"})
        assert resolve_credential().token == "file-key"

    def test_environment_wins_over_file(self, api_key, credentials_path):
        _write(credentials_path, {"apiKey": "file-key"})
        credential = resolve_credential()
        assert credential.token == api_key
        assert credential.source == "environment"

    def test_file_identity_hints(self, credentials_path):
        _write(credentials_path, {"apiKey": "file-key", "agentId": "a1", "agentName": "scout"})
        credential = resolve_credential()
        assert credential.token == "file-key"
        assert credential.agent_id == "a1"
        assert credential.agent_name == "scout"
        assert credential.source == "file"

    def test_file_reread_on_every_call(self, credentials_path):
        _write(credentials_path, {"apiKey": "first"})
        assert resolve_credential().token == "first"
        _write(credentials_path, {"apiKey": "second"})
        assert resolve_credential().token == "second"
        credentials_path.unlink()
        assert resolve_credential() is None

    def test_environment_reread_on_every_call(self, monkeypatch):
        assert resolve_credential() is None
        monkeypatch.setenv("CLAWSLIST_API_KEY", "late")
        assert resolve_credential().token == "late"

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "",
            "null",
            "[]",
            json.dumps({"apiKey": ""}),
            json.dumps({"apiKey": 12345}),
            json.dumps({"agentId": "a1"}),
        ],
    )
    def test_malformed_file_means_no_credential(self, credentials_path, content):
        _write(credentials_path, content)
        assert resolve_credential() is None

    def test_directory_instead_of_file(self, credentials_path):
        credentials_path.mkdir()
        assert resolve_credential() is None

    def test_authorization_header(self):
        assert Credential(token="abc").authorization_header == "Bearer abc"


def test_read_credentials_file_ignores_unknown_keys(credentials_path):
    _write(credentials_path, {"apiKey": "k", "createdAt": "2024-01-01"})
    stored = read_credentials_file(credentials_path)
    assert stored.api_key == "k"


def test_read_credentials_file_missing(tmp_path):
    assert read_credentials_file(tmp_path / "nope.json") is None
