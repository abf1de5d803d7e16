"""Navigation tool: jump to a card or company by name."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hudu_mcp.gateway.errors import GatewayError
from hudu_mcp.tools.models import ToolDescriptor, ToolResult
from hudu_mcp.tools.schema import action_schema, prop

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

NAVIGATION_ACTIONS = ("card_jump", "card_lookup", "company_jump")

NAVIGATION_TOOL = ToolDescriptor(
    name="navigation",
    description="Navigation operations for jumping to specific Hudu locations",
    input_schema={
        "type": "object",
        "properties": {
            "action": action_schema(NAVIGATION_ACTIONS, "Navigation action to perform"),
            "name": prop("string", "Name for searching/jumping"),
            "company_id": prop("number", "Company ID for filtering"),
        },
        "required": ["action"],
    },
)


async def execute_navigation(arguments: dict[str, Any], gateway: HuduClient) -> ToolResult:
    action = arguments.get("action")
    if action not in NAVIGATION_ACTIONS:
        return ToolResult.fail(f"Unknown navigation action: {action}")

    name = arguments.get("name")
    if not isinstance(name, str) or not name.strip():
        return ToolResult.fail(f"Name is required for {action} operation")
    company_id = arguments.get("company_id")

    try:
        if action == "card_jump":
            cards = await gateway.card_jump(name, company_id)
            return ToolResult.ok(cards, f'Jumped to card "{name}" successfully')
        if action == "card_lookup":
            cards = await gateway.card_lookup(name, company_id)
            return ToolResult.ok(cards, "Card lookup completed successfully")
        companies = await gateway.company_jump(name)
        return ToolResult.ok(companies, f'Jumped to company "{name}" successfully')
    except GatewayError as exc:
        return ToolResult.fail(f"Navigation operation failed: {exc}")
