"""JSON-Schema fragments shared by the tool descriptors."""

from __future__ import annotations

from typing import Any

STANDARD_ACTIONS = ("create", "get", "update", "delete", "archive", "unarchive")
BASIC_ACTIONS = ("create", "get", "update", "delete")
WORKFLOW_ACTIONS = (*BASIC_ACTIONS, "kickoff", "duplicate", "create_from_template")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 25

ID = {"type": "number", "description": "ID for get/update/delete/archive operations"}
COMPANY_ID = {"type": "number", "description": "Company ID"}
FOLDER_ID = {"type": "number", "description": "Folder ID"}
NAME = {"type": "string", "description": "Name"}
DESCRIPTION = {"type": "string", "description": "Description"}


def prop(type_: str, description: str, **extra: Any) -> dict[str, Any]:
    return {"type": type_, "description": description, **extra}


def action_schema(actions: tuple[str, ...], description: str = "Action to perform") -> dict[str, Any]:
    return {"type": "string", "enum": list(actions), "description": description}


def fields_schema(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": dict(properties),
        "description": "Data for create/update operations",
    }


def pagination_properties() -> dict[str, Any]:
    return {
        "page": {"type": "number", "minimum": 1, "default": 1, "description": "Page number"},
        "page_size": {
            "type": "number",
            "minimum": 1,
            "maximum": MAX_PAGE_SIZE,
            "default": DEFAULT_PAGE_SIZE,
            "description": "Results per page",
        },
    }


def query_schema(filters: dict[str, Any]) -> dict[str, Any]:
    """Input schema for a ``<resource>.query`` tool."""
    return {
        "type": "object",
        "properties": {
            "search": {"type": "string", "description": "Search query text"},
            "name": {"type": "string", "description": "Filter by name"},
            **pagination_properties(),
            **filters,
        },
    }


def crud_schema(actions: tuple[str, ...], fields: dict[str, Any]) -> dict[str, Any]:
    """Input schema for a resource's action tool."""
    return {
        "type": "object",
        "properties": {
            "action": action_schema(actions),
            "id": dict(ID),
            "fields": fields_schema(fields),
        },
        "required": ["action"],
    }


def coerce_id(value: Any) -> int | None:
    """Return *value* as a positive integer id, or ``None`` if it is not one.

    ASCII digit strings such as ``"42"`` are accepted. Booleans are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        number = int(value.strip())
        return number if number > 0 else None
    return None


def coerce_page(value: Any, *, maximum: int | None = None) -> int | None:
    """Validate a pagination number; ``None`` means invalid."""
    number = coerce_id(value)
    if number is None:
        return None
    if maximum is not None and number > maximum:
        return None
    return number
