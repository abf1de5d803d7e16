"""Tests for the global search tool."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

from hudu_mcp.gateway.errors import ApiError, UnauthorizedError
from hudu_mcp.tools.search import SEARCH_TOOL, execute_search


def _by_collection(results: dict[str, Any]):
    async def fake_list(collection: str, **_: object) -> Any:
        outcome = results[collection]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    return fake_list


class TestSearch:
    async def test_query_required(self, gateway: AsyncMock) -> None:
        result = await execute_search({"query": "   "}, gateway)
        assert result.error == "Search query is required"
        gateway.list.assert_not_awaited()

    async def test_unsupported_type(self, gateway: AsyncMock) -> None:
        result = await execute_search({"query": "vpn", "type": "tickets"}, gateway)
        assert result.error == "Unsupported search type: tickets"
        gateway.list.assert_not_awaited()

    async def test_non_string_type_is_unsupported(self, gateway: AsyncMock) -> None:
        result = await execute_search({"query": "vpn", "type": ["assets"]}, gateway)
        assert result.error == "Unsupported search type: ['assets']"
        gateway.list.assert_not_awaited()

    async def test_single_type(self, gateway: AsyncMock) -> None:
        gateway.list.return_value = [{"id": 1}]
        result = await execute_search({"query": "vpn", "type": "passwords", "company_id": 4}, gateway)
        gateway.list.assert_awaited_once_with("asset_passwords", search="vpn", company_id=4)
        assert result.data == [{"id": 1}]
        assert result.message == 'Search completed for query: "vpn"'

    async def test_companies_are_not_company_scoped(self, gateway: AsyncMock) -> None:
        await execute_search({"query": "acme", "type": "companies", "company_id": 4}, gateway)
        gateway.list.assert_awaited_once_with("companies", search="acme")

    async def test_fan_out_covers_all_types(self, gateway: AsyncMock) -> None:
        gateway.list.side_effect = _by_collection(
            {
                "articles": [{"id": 1}],
                "assets": [],
                "asset_passwords": [{"id": 2}],
                "companies": [{"id": 3}],
            }
        )
        result = await execute_search({"query": "backup"}, gateway)
        assert result.success
        assert result.data == {
            "articles": [{"id": 1}],
            "assets": [],
            "passwords": [{"id": 2}],
            "companies": [{"id": 3}],
        }
        assert gateway.list.await_count == 4

    async def test_fan_out_skips_forbidden_types(self, gateway: AsyncMock) -> None:
        gateway.list.side_effect = _by_collection(
            {
                "articles": [{"id": 1}],
                "assets": [],
                "asset_passwords": UnauthorizedError(403, "Forbidden"),
                "companies": [],
            }
        )
        result = await execute_search({"query": "backup"}, gateway)
        assert result.success
        assert result.data["passwords"] == []

    async def test_fan_out_fails_on_other_errors(self, gateway: AsyncMock) -> None:
        gateway.list.side_effect = _by_collection(
            {
                "articles": ApiError(500, "boom"),
                "assets": [],
                "asset_passwords": [],
                "companies": [],
            }
        )
        result = await execute_search({"query": "backup"}, gateway)
        assert result.error == "Search operation failed: boom (HTTP 500)"

    def test_descriptor(self) -> None:
        assert SEARCH_TOOL.input_schema["required"] == ["query"]
        assert SEARCH_TOOL.input_schema["properties"]["type"]["enum"] == [
            "articles",
            "assets",
            "passwords",
            "companies",
        ]
