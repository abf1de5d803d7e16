"""Tests for Dispatcher routing and JSON-RPC error shaping."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest

from hudu_mcp.gateway.errors import NotFoundError
from hudu_mcp.protocol.dispatcher import Dispatcher
from hudu_mcp.protocol.models import DEFAULT_PROTOCOL_VERSION
from hudu_mcp.tools.registry import build_registry


def _call(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> dict[str, Any]:
    envelope: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        envelope["params"] = params
    return envelope


@pytest.fixture
def dispatcher(gateway: AsyncMock) -> Dispatcher:
    return Dispatcher(build_registry(), gateway)


def _payload(response: dict[str, Any]) -> dict[str, Any]:
    return json.loads(response["result"]["content"][0]["text"])


class TestEnvelopeValidation:
    @pytest.mark.parametrize(
        "raw",
        [
            "not an object",
            [],
            {"id": 1, "method": "ping"},
            {"jsonrpc": "1.0", "id": 1, "method": "ping"},
            {"jsonrpc": "2.0", "id": 1, "method": 42},
            {"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": [1, 2]},
        ],
    )
    async def test_malformed_envelopes(
        self, dispatcher: Dispatcher, gateway: AsyncMock, raw: Any
    ) -> None:
        response = await dispatcher.handle(raw)
        assert response is not None
        assert response["error"]["code"] == -32600
        assert gateway.mock_calls == []

    async def test_echoes_id_of_bad_request(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "1.0", "id": "abc", "method": "ping"})
        assert response is not None
        assert response["id"] == "abc"

    async def test_bad_id_answered_with_null(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": {"x": 1}, "method": "ping"})
        assert response is not None
        assert response["id"] is None
        assert response["error"]["code"] == -32600

    async def test_boolean_id_rejected(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle({"jsonrpc": "2.0", "id": True, "method": "ping"})
        assert response is not None
        assert response["error"]["code"] == -32600

    async def test_unknown_method(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("tools/destroy", request_id=9))
        assert response == {
            "jsonrpc": "2.0",
            "id": 9,
            "error": {"code": -32601, "message": "Method not found: tools/destroy"},
        }


class TestNotifications:
    async def test_notification_gets_no_response(self, dispatcher: Dispatcher) -> None:
        assert await dispatcher.handle({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None

    async def test_failed_notification_is_silent(self, dispatcher: Dispatcher) -> None:
        assert await dispatcher.handle({"jsonrpc": "2.0", "method": "nope"}) is None

    async def test_initialized_with_id_is_acknowledged(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("notifications/initialized", request_id=7))
        assert response == {"jsonrpc": "2.0", "id": 7, "result": {}}

    async def test_null_id_is_a_call(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("ping", request_id=None))
        assert response == {"jsonrpc": "2.0", "id": None, "result": {}}


class TestLifecycle:
    async def test_initialize_echoes_protocol_version(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("initialize", {"protocolVersion": "2024-11-05"}))
        assert response is not None
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["capabilities"] == {"tools": {}, "resources": {}}
        assert result["serverInfo"] == {"name": "hudu-mcp-server", "version": "1.0.0"}

    async def test_initialize_default_version(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("initialize"))
        assert response is not None
        assert response["result"]["protocolVersion"] == DEFAULT_PROTOCOL_VERSION

    async def test_ping(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("ping", request_id="p-1"))
        assert response == {"jsonrpc": "2.0", "id": "p-1", "result": {}}


class TestTools:
    async def test_list_is_idempotent(self, dispatcher: Dispatcher) -> None:
        first = await dispatcher.handle(_call("tools/list", request_id=1))
        second = await dispatcher.handle(_call("tools/list", request_id=2))
        assert first is not None
        assert second is not None
        assert first["result"] == second["result"]
        names = [tool["name"] for tool in first["result"]["tools"]]
        assert "articles" in names
        assert "articles.query" in names

    async def test_unknown_tool(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        response = await dispatcher.handle(_call("tools/call", {"name": "tickets"}))
        assert response is not None
        assert response["error"]["code"] == -32603
        assert response["error"]["message"] == "Unknown tool: tickets"
        assert gateway.mock_calls == []

    async def test_missing_tool_name(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("tools/call", {}))
        assert response is not None
        assert response["error"]["code"] == -32601

    async def test_arguments_must_be_object(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(
            _call("tools/call", {"name": "articles", "arguments": "get"})
        )
        assert response is not None
        assert response["error"]["code"] == -32600

    async def test_validation_failure_makes_no_backend_call(
        self, dispatcher: Dispatcher, gateway: AsyncMock
    ) -> None:
        response = await dispatcher.handle(
            _call(
                "tools/call",
                {"name": "articles", "arguments": {"action": "create", "fields": {"name": "x"}}},
            )
        )
        assert response is not None
        assert response["error"] == {
            "code": -32603,
            "message": "Name and content are required for creating articles",
        }
        assert gateway.mock_calls == []

    async def test_non_ascii_digit_id_rejected(
        self, dispatcher: Dispatcher, gateway: AsyncMock
    ) -> None:
        response = await dispatcher.handle(
            _call("tools/call", {"name": "articles", "arguments": {"action": "get", "id": "²"}})
        )
        assert response is not None
        assert response["error"] == {
            "code": -32603,
            "message": "Article ID is required for get operation",
        }
        assert gateway.mock_calls == []

    async def test_create_then_get(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        stored: dict[int, dict[str, Any]] = {}

        async def create(collection: str, fields: dict[str, Any]) -> dict[str, Any]:
            record = {"id": len(stored) + 1, **fields}
            stored[record["id"]] = record
            return record

        async def get(collection: str, record_id: int) -> dict[str, Any]:
            return stored[record_id]

        gateway.create.side_effect = create
        gateway.get.side_effect = get

        created = await dispatcher.handle(
            _call(
                "tools/call",
                {
                    "name": "articles",
                    "arguments": {
                        "action": "create",
                        "fields": {"name": "Router Guide", "content": "<p>steps</p>"},
                    },
                },
            )
        )
        assert created is not None
        record = _payload(created)["data"]
        assert _payload(created)["message"] == "Article created successfully"

        fetched = await dispatcher.handle(
            _call("tools/call", {"name": "articles", "arguments": {"action": "get", "id": record["id"]}})
        )
        assert fetched is not None
        assert _payload(fetched) == {"success": True, "data": record}

    async def test_success_content_shape(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        gateway.list.return_value = [{"id": 1}]
        response = await dispatcher.handle(
            _call("tools/call", {"name": "networks.query", "arguments": {"company_id": 2}})
        )
        assert response is not None
        content = response["result"]["content"]
        assert len(content) == 1
        assert content[0]["type"] == "text"
        assert _payload(response)["data"] == [{"id": 1}]

    async def test_missing_arguments_default_to_empty(
        self, dispatcher: Dispatcher, gateway: AsyncMock
    ) -> None:
        response = await dispatcher.handle(_call("tools/call", {"name": "vlans.query"}))
        assert response is not None
        assert "result" in response
        gateway.list.assert_awaited_once_with("vlans")

    async def test_unexpected_executor_error_is_internal(
        self, dispatcher: Dispatcher, gateway: AsyncMock
    ) -> None:
        gateway.get.side_effect = RuntimeError("kaboom")
        response = await dispatcher.handle(
            _call("tools/call", {"name": "articles", "arguments": {"action": "get", "id": 1}})
        )
        assert response is not None
        assert response["error"]["code"] == -32603
        assert response["error"]["data"] == "kaboom"


class TestResources:
    async def test_list(self, dispatcher: Dispatcher) -> None:
        response = await dispatcher.handle(_call("resources/list"))
        assert response is not None
        resources = response["result"]["resources"]
        uris = [r["uri"] for r in resources]
        assert "res://article/list" in uris
        assert all(r["mimeType"] == "application/json" for r in resources)

    async def test_read_single_record(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        gateway.get.return_value = {"id": 42, "name": "VPN"}
        response = await dispatcher.handle(_call("resources/read", {"uri": "res://article/42"}))
        gateway.get.assert_awaited_once_with("articles", 42)
        gateway.list.assert_not_awaited()
        assert response is not None
        (content,) = response["result"]["contents"]
        assert content["uri"] == "res://article/42"
        assert content["mimeType"] == "application/json"
        assert json.loads(content["text"]) == {"id": 42, "name": "VPN"}

    async def test_read_list(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        gateway.list.return_value = [{"id": 1}]
        response = await dispatcher.handle(_call("resources/read", {"uri": "res://article/list"}))
        gateway.list.assert_awaited_once_with("articles")
        assert response is not None
        assert json.loads(response["result"]["contents"][0]["text"]) == [{"id": 1}]

    @pytest.mark.parametrize(
        "uri",
        [
            "res://ticket/1",
            "ftp://article/1",
            "res://article/abc",
            "res://article/²",
            "res://activity-log/3",
        ],
    )
    async def test_invalid_uri(self, dispatcher: Dispatcher, gateway: AsyncMock, uri: str) -> None:
        response = await dispatcher.handle(_call("resources/read", {"uri": uri}))
        assert response is not None
        assert response["error"]["code"] == -32600
        assert gateway.mock_calls == []

    async def test_backend_failure(self, dispatcher: Dispatcher, gateway: AsyncMock) -> None:
        gateway.get.side_effect = NotFoundError(404, "Not found")
        response = await dispatcher.handle(_call("resources/read", {"uri": "res://asset/7"}))
        assert response is not None
        assert response["error"]["code"] == -32603
        assert response["error"]["message"] == (
            "Failed to read resource res://asset/7: Not found (HTTP 404)"
        )


class TestBatch:
    async def test_order_preserved(self, dispatcher: Dispatcher) -> None:
        responses = await dispatcher.handle_batch(
            [
                _call("ping", request_id=1),
                _call("tools/destroy", request_id=2),
                _call("tools/list", request_id=3),
            ]
        )
        assert [r["id"] for r in responses] == [1, 2, 3]
        assert "result" in responses[0]
        assert responses[1]["error"]["code"] == -32601
        assert "result" in responses[2]

    async def test_failing_executor_keeps_position(
        self, dispatcher: Dispatcher, gateway: AsyncMock
    ) -> None:
        gateway.get.side_effect = NotFoundError(404, "Not found")
        responses = await dispatcher.handle_batch(
            [
                _call("ping", request_id=1),
                _call(
                    "tools/call",
                    {"name": "articles", "arguments": {"action": "get", "id": 3}},
                    request_id=2,
                ),
                _call("ping", request_id=3),
            ]
        )
        assert [r["id"] for r in responses] == [1, 2, 3]
        assert responses[0]["result"] == {}
        assert responses[1]["error"]["code"] == -32603
        assert responses[1]["error"]["message"] == (
            "Articles operation failed: Not found (HTTP 404)"
        )
        assert responses[2]["result"] == {}
        gateway.get.assert_awaited_once_with("articles", 3)

    async def test_notifications_dropped(self, dispatcher: Dispatcher) -> None:
        responses = await dispatcher.handle_batch(
            [{"jsonrpc": "2.0", "method": "notifications/initialized"}, _call("ping", request_id=5)]
        )
        assert responses == [{"jsonrpc": "2.0", "id": 5, "result": {}}]
