"""Integration tests for the main application."""

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from src.auth.exceptions import AuthenticationError, CredentialsMissingError, MCPGatewayError
from src.gateway.exceptions import ToolNotFoundError
from src.main import (
    app,
    authentication_exception_handler,
    gateway_exception_handler,
    tool_not_found_handler,
)


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def error_client() -> TestClient:
    """Bare app wired with the application's exception handlers."""
    error_app = FastAPI()
    error_app.add_exception_handler(AuthenticationError, authentication_exception_handler)
    error_app.add_exception_handler(ToolNotFoundError, tool_not_found_handler)
    error_app.add_exception_handler(MCPGatewayError, gateway_exception_handler)

    raising = APIRouter(prefix="/raise")

    @raising.get("/auth")
    async def raise_auth():
        raise CredentialsMissingError("get_agent_info")

    @raising.get("/missing")
    async def raise_not_found():
        raise ToolNotFoundError("nope")

    @raising.get("/gateway")
    async def raise_gateway():
        raise MCPGatewayError("boom", code="BOOM")

    error_app.include_router(raising)
    return TestClient(error_app)


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": "Clawslist MCP Gateway"}


def test_auth_error_handler(error_client):
    response = error_client.get("/raise/auth")
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "CREDENTIALS_MISSING"
    assert body["message"].startswith("No API key found")


def test_tool_not_found_handler(error_client):
    response = error_client.get("/raise/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "TOOL_NOT_FOUND", "message": "Unknown tool: nope"}


def test_gateway_error_handler(error_client):
    response = error_client.get("/raise/gateway")
    assert response.status_code == 500
    assert response.json() == {"error": "BOOM", "message": "boom"}


def test_handlers_registered_on_app():
    assert app.exception_handlers[AuthenticationError] is authentication_exception_handler
    assert app.exception_handlers[ToolNotFoundError] is tool_not_found_handler
    assert app.exception_handlers[MCPGatewayError] is gateway_exception_handler


def test_transports_mounted(client):
    assert client.get("/mcp/tools").status_code == 200
    response = client.post("/sse", json={"jsonrpc": "2.0", "id": 1, "method": "ping"})
    assert response.json() == {"jsonrpc": "2.0", "id": 1, "result": {}}


def test_app_routes_do_not_leak_between_tests():
    paths = {getattr(route, "path", None) for route in app.routes}
    assert "/health" in paths
    assert not any(path and path.startswith("/raise") for path in paths)
