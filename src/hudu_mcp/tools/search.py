"""Global search across articles, assets, passwords and companies."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from hudu_mcp.gateway.errors import GatewayError, UnauthorizedError
from hudu_mcp.tools.models import ToolDescriptor, ToolResult
from hudu_mcp.tools.schema import prop

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

logger = logging.getLogger(__name__)

# search type -> gateway collection
SEARCH_TYPES: dict[str, str] = {
    "articles": "articles",
    "assets": "assets",
    "passwords": "asset_passwords",
    "companies": "companies",
}

SEARCH_TOOL = ToolDescriptor(
    name="search",
    description="Global search across all Hudu content types",
    input_schema={
        "type": "object",
        "properties": {
            "query": prop("string", "Search query text"),
            "type": prop("string", "Specific content type to search", enum=list(SEARCH_TYPES)),
            "company_id": prop("number", "Filter results by company ID"),
        },
        "required": ["query"],
    },
)


async def _search_one(
    gateway: HuduClient, search_type: str, query: str, company_id: Any
) -> list[dict[str, Any]]:
    params: dict[str, Any] = {"search": query}
    # Companies are not company-scoped.
    if search_type != "companies":
        params["company_id"] = company_id
    return await gateway.list(SEARCH_TYPES[search_type], **params)


async def execute_search(arguments: dict[str, Any], gateway: HuduClient) -> ToolResult:
    """Search one content type, or all four concurrently when ``type`` is omitted.

    In the fan-out case a type the API key may not read (401/403) is logged
    and reported as ``[]``; any other failure fails the whole search.
    """
    query = arguments.get("query")
    if not isinstance(query, str) or not query.strip():
        return ToolResult.fail("Search query is required")
    query = query.strip()

    search_type = arguments.get("type")
    company_id = arguments.get("company_id")
    if search_type is not None and (
        not isinstance(search_type, str) or search_type not in SEARCH_TYPES
    ):
        return ToolResult.fail(f"Unsupported search type: {search_type}")

    try:
        if search_type:
            results: Any = await _search_one(gateway, search_type, query, company_id)
        else:
            outcomes = await asyncio.gather(
                *(_search_one(gateway, name, query, company_id) for name in SEARCH_TYPES),
                return_exceptions=True,
            )
            results = {}
            for name, outcome in zip(SEARCH_TYPES, outcomes):
                if isinstance(outcome, UnauthorizedError):
                    logger.warning("Skipping %s in search: %s", name, outcome)
                    results[name] = []
                elif isinstance(outcome, BaseException):
                    raise outcome
                else:
                    results[name] = outcome
    except GatewayError as exc:
        return ToolResult.fail(f"Search operation failed: {exc}")

    return ToolResult.ok(results, f'Search completed for query: "{query}"')
