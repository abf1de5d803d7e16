"""Administrative tool: API info, activity logs, exports and expirations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hudu_mcp.gateway.errors import GatewayError
from hudu_mcp.tools.models import ToolDescriptor, ToolResult
from hudu_mcp.tools.schema import action_schema, pagination_properties, prop

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

ADMIN_ACTIONS = (
    "get_api_info",
    "get_activity_logs",
    "delete_activity_logs",
    "get_exports",
    "get_s3_exports",
    "get_expirations",
)

ADMIN_TOOL = ToolDescriptor(
    name="admin",
    description="Administrative operations for Hudu instance management",
    input_schema={
        "type": "object",
        "properties": {
            "action": action_schema(ADMIN_ACTIONS, "Administrative action to perform"),
            "user_id": prop("number", "Filter by user ID (for activity logs)"),
            "resource_type": prop("string", "Filter by resource type (for activity logs)"),
            "start_date": prop("string", "Filter by start date ISO format (for activity logs)"),
            "datetime": prop("string", "Delete logs before this ISO datetime"),
            "delete_unassigned_logs": prop("boolean", "Whether to delete unassigned logs"),
            "company_id": prop("number", "Filter by company ID (for expirations)"),
            "expiration_type": prop("string", "Filter by expiration type"),
            **pagination_properties(),
        },
        "required": ["action"],
    },
)


def _pick(arguments: dict[str, Any], *keys: str) -> dict[str, Any]:
    return {key: arguments.get(key) for key in keys}


async def execute_admin(arguments: dict[str, Any], gateway: HuduClient) -> ToolResult:
    action = arguments.get("action")
    if action not in ADMIN_ACTIONS:
        return ToolResult.fail(f"Unknown admin action: {action}")

    if action == "delete_activity_logs" and not arguments.get("datetime"):
        return ToolResult.fail("Datetime is required for delete_activity_logs operation")

    try:
        if action == "get_api_info":
            info = await gateway.api_info()
            return ToolResult.ok(info, "API information retrieved successfully")

        if action == "get_activity_logs":
            logs = await gateway.activity_logs(
                **_pick(arguments, "user_id", "resource_type", "start_date", "page", "page_size")
            )
            return ToolResult.ok(logs, "Activity logs retrieved successfully")

        if action == "delete_activity_logs":
            await gateway.delete_activity_logs(
                arguments["datetime"],
                delete_unassigned_logs=bool(arguments.get("delete_unassigned_logs", False)),
            )
            return ToolResult.ok(None, "Activity logs deleted successfully")

        if action == "get_exports":
            exports = await gateway.exports(**_pick(arguments, "page", "page_size"))
            return ToolResult.ok(exports, "Exports retrieved successfully")

        if action == "get_s3_exports":
            s3_exports = await gateway.s3_exports(**_pick(arguments, "page", "page_size"))
            return ToolResult.ok(s3_exports, "S3 exports retrieved successfully")

        expirations = await gateway.expirations(
            **_pick(arguments, "company_id", "expiration_type", "page", "page_size")
        )
        return ToolResult.ok(expirations, "Expirations retrieved successfully")
    except GatewayError as exc:
        return ToolResult.fail(f"Admin operation failed: {exc}")
