"""Route-level tests for the MCP SSE transport and the diagnostic REST API."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.gateway.router import router as gateway_router
from src.gateway.schemas import Failure, Success
from src.mcp_transport.sse import router as mcp_router


def _initialize_payload() -> dict:
    return {
        "jsonrpc": "2.0",
        "id": "req-1",
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "test", "version": "1.0"},
        },
    }


def _tool_call_payload(name: str, arguments: dict | None = None) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": "req-2",
        "method": "tools/call",
        "params": {
            "name": name,
            "arguments": arguments or {},
        },
    }


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    app.include_router(mcp_router)
    app.include_router(gateway_router)
    return TestClient(app)


class TestSsePost:
    def test_initialize(self, client):
        response = client.post("/sse", json=_initialize_payload())

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "req-1"
        assert body["result"]["serverInfo"] == {"name": "clawslist-mcp-server", "version": "1.0.0"}
        assert "error" not in body

    def test_notification_is_accepted_without_body(self, client):
        response = client.post("/sse", json={"jsonrpc": "2.0", "method": "notifications/initialized"})

        assert response.status_code == 202
        assert response.content == b""

    def test_tools_list(self, client):
        response = client.post("/sse", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

        tools = response.json()["result"]["tools"]
        assert len(tools) == 19
        assert {tool["name"] for tool in tools} >= {"register_agent", "create_magic_link"}

    def test_tools_call_renders_success(self, client):
        with patch(
            "src.mcp_transport.service.invoke_tool",
            new_callable=AsyncMock,
            return_value=Success(payload={"id": "L1"}),
        ) as mock_invoke:
            response = client.post("/sse", json=_tool_call_payload("get_listing", {"listingId": "L1"}))

        result = response.json()["result"]
        assert result["isError"] is False
        assert result["content"] == [{"type": "text", "text": '{\n  "id": "L1"\n}'}]
        request = mock_invoke.call_args.kwargs["request"]
        assert request.tool_name == "get_listing"
        assert request.arguments == {"listingId": "L1"}
        assert request.request_id == "req-2"

    def test_tools_call_renders_failure(self, client):
        with patch(
            "src.mcp_transport.service.invoke_tool",
            new_callable=AsyncMock,
            return_value=Failure(message="Listing not found", details={"error": "Listing not found"}),
        ):
            response = client.post("/sse", json=_tool_call_payload("get_listing", {"listingId": "x"}))

        result = response.json()["result"]
        assert result["isError"] is True
        assert result["content"][0]["text"] == "Error: Listing not found"

    def test_unknown_tool_makes_no_request(self, client):
        with patch("src.gateway.service.execute", new_callable=AsyncMock) as mock_execute:
            response = client.post("/sse", json=_tool_call_payload("does_not_exist"))

        assert response.json()["result"]["content"][0]["text"] == "Error: Unknown tool: does_not_exist"
        mock_execute.assert_not_called()

    def test_parse_error(self, client):
        response = client.post(
            "/sse",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.json() == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error"},
        }

    def test_method_not_found(self, client):
        response = client.post("/sse", json={"jsonrpc": "2.0", "id": 9, "method": "prompts/list"})

        assert response.json()["error"]["code"] == -32601

    def test_internal_error(self, client):
        with patch(
            "src.mcp_transport.service.handle_tools_list",
            side_effect=RuntimeError("catalog exploded"),
        ):
            response = client.post("/sse", json={"jsonrpc": "2.0", "id": 10, "method": "tools/list"})

        error = response.json()["error"]
        assert error["code"] == -32603
        assert "catalog exploded" in error["message"]


class TestGatewayRoutes:
    def test_list_tools(self, client):
        response = client.get("/mcp/tools")

        assert response.status_code == 200
        tools = response.json()
        assert len(tools) == 19
        assert set(tools[0]) == {"name", "description", "input_schema"}

    def test_invoke_returns_failure_details(self, client):
        failure = Failure(message="not found", details={"error": "not found", "code": 404})
        with patch("src.gateway.router.invoke_tool", new_callable=AsyncMock, return_value=failure):
            response = client.post(
                "/mcp/invoke",
                json={"tool_name": "get_listing", "arguments": {"listingId": "x"}},
            )

        assert response.status_code == 200
        assert response.json() == {
            "kind": "failure",
            "message": "not found",
            "details": {"error": "not found", "code": 404},
        }

    def test_invoke_returns_success(self, client):
        with patch(
            "src.gateway.router.invoke_tool",
            new_callable=AsyncMock,
            return_value=Success(payload=[1, 2]),
        ):
            response = client.post("/mcp/invoke", json={"tool_name": "list_listings"})

        assert response.json() == {"kind": "success", "payload": [1, 2]}

    def test_request_id_header_is_used(self, client):
        with patch(
            "src.gateway.router.invoke_tool",
            new_callable=AsyncMock,
            return_value=Success(payload={}),
        ) as mock_invoke:
            client.post(
                "/mcp/invoke",
                json={"tool_name": "list_listings", "request_id": "from-body"},
                headers={"X-Request-ID": "from-header"},
            )

        assert mock_invoke.call_args.kwargs["request"].request_id == "from-header"

    def test_request_id_generated_when_absent(self, client):
        with patch(
            "src.gateway.router.invoke_tool",
            new_callable=AsyncMock,
            return_value=Success(payload={}),
        ) as mock_invoke:
            client.post("/mcp/invoke", json={"tool_name": "list_listings"})

        assert mock_invoke.call_args.kwargs["request"].request_id

    def test_invoke_validates_body(self, client):
        response = client.post("/mcp/invoke", json={"arguments": {}})

        assert response.status_code == 422
