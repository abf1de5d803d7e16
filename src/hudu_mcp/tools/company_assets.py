"""Company-scoped asset tool: list, read, archive and re-layout assets under a company."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hudu_mcp.gateway.errors import GatewayError
from hudu_mcp.tools.models import ToolDescriptor, ToolResult
from hudu_mcp.tools.schema import action_schema, coerce_id, pagination_properties, prop

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

COMPANY_ASSET_ACTIONS = ("list", "get", "archive", "unarchive", "move_layout")

_LIST_FILTERS = ("name", "asset_layout_id", "search", "archived", "page", "page_size")

COMPANY_ASSETS_TOOL = ToolDescriptor(
    name="company_assets",
    description="Asset operations scoped to a single company",
    input_schema={
        "type": "object",
        "properties": {
            "action": action_schema(COMPANY_ASSET_ACTIONS),
            "company_id": prop("number", "Company ID"),
            "asset_id": prop("number", "Asset ID (for get/archive/unarchive/move_layout)"),
            "new_layout_id": prop("number", "Target asset layout ID (for move_layout)"),
            "name": prop("string", "Filter by name (for list)"),
            "asset_layout_id": prop("number", "Filter by asset layout ID (for list)"),
            "search": prop("string", "Search query text (for list)"),
            "archived": prop("boolean", "Include archived assets (for list)"),
            **pagination_properties(),
        },
        "required": ["action", "company_id"],
    },
)


async def execute_company_assets(arguments: dict[str, Any], gateway: HuduClient) -> ToolResult:
    action = arguments.get("action")
    if action not in COMPANY_ASSET_ACTIONS:
        return ToolResult.fail(f"Unknown company asset action: {action}")

    company_id = coerce_id(arguments.get("company_id"))
    if company_id is None:
        if action == "list":
            return ToolResult.fail("Company ID is required")
        return ToolResult.fail("Company ID and Asset ID are required")

    try:
        if action == "list":
            filters = {key: arguments.get(key) for key in _LIST_FILTERS}
            assets = await gateway.company_assets(company_id, **filters)
            return ToolResult.ok(assets, "Company assets retrieved successfully")

        asset_id = coerce_id(arguments.get("asset_id"))
        if asset_id is None:
            return ToolResult.fail("Company ID and Asset ID are required")

        if action == "get":
            asset = await gateway.company_asset(company_id, asset_id)
            return ToolResult.ok(asset, "Company asset retrieved successfully")
        if action == "archive":
            asset = await gateway.archive_company_asset(company_id, asset_id)
            return ToolResult.ok(asset, "Company asset archived")
        if action == "unarchive":
            asset = await gateway.unarchive_company_asset(company_id, asset_id)
            return ToolResult.ok(asset, "Company asset unarchived")

        layout_id = coerce_id(arguments.get("new_layout_id"))
        if layout_id is None:
            return ToolResult.fail("Company ID, Asset ID, and new layout ID are required")
        asset = await gateway.move_company_asset_layout(company_id, asset_id, layout_id)
        return ToolResult.ok(asset, "Company asset moved to new layout")
    except GatewayError as exc:
        return ToolResult.fail(f"Company asset operation failed: {exc}")
