"""Resource tools — one action tool and one query tool per Hudu collection.

Every resource is described by a :class:`ResourceToolSpec` row; the generic
executors below turn a row plus the caller's arguments into exactly one
gateway call. Validation failures return before any network I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from hudu_mcp.gateway.errors import GatewayError
from hudu_mcp.tools.models import ToolDescriptor, ToolResult
from hudu_mcp.tools.schema import (
    BASIC_ACTIONS,
    COMPANY_ID,
    DESCRIPTION,
    FOLDER_ID,
    MAX_PAGE_SIZE,
    NAME,
    STANDARD_ACTIONS,
    WORKFLOW_ACTIONS,
    coerce_id,
    coerce_page,
    crud_schema,
    prop,
    query_schema,
)

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

logger = logging.getLogger(__name__)

_QUERY_BASE_KEYS = ("search", "name", "page", "page_size")

_PAST_TENSE = {
    "create": "created",
    "update": "updated",
    "delete": "deleted",
    "archive": "archived",
    "unarchive": "unarchived",
    "kickoff": "kicked off",
    "duplicate": "duplicated",
    "create_from_template": "created from template",
}


class ResourceToolSpec(BaseModel):
    """Static description of one resource's tool pair."""

    model_config = {"frozen": True}

    name: str
    collection: str
    description: str
    query_description: str
    noun: str
    plural: str
    actions: tuple[str, ...] = BASIC_ACTIONS
    required: tuple[str, ...] = ("name",)
    required_message: str
    properties: dict[str, Any] = {}
    filters: dict[str, Any] = {}
    id_label: str | None = None
    id_messages: dict[str, str] = {}

    @property
    def query_name(self) -> str:
        return f"{self.name}.query"

    @property
    def query_keys(self) -> tuple[str, ...]:
        return (*_QUERY_BASE_KEYS, *self.filters)

    def id_required(self, action: str) -> str:
        if action in self.id_messages:
            return self.id_messages[action]
        return f"{self.id_label or self.noun} ID is required for {action} operation"

    def success_message(self, action: str) -> str | None:
        past = _PAST_TENSE.get(action)
        return f"{self.noun} {past} successfully" if past else None

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=crud_schema(self.actions, self.properties),
        )

    def query_descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.query_name,
            description=self.query_description,
            input_schema=query_schema(self.filters),
        )


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


async def execute_resource(
    spec: ResourceToolSpec, arguments: dict[str, Any], gateway: HuduClient
) -> ToolResult:
    """Run one ``action`` against *spec*'s collection."""
    action = arguments.get("action")
    if not isinstance(action, str) or not action:
        return ToolResult.fail("Action is required")
    if action not in spec.actions:
        return ToolResult.fail(f"Unknown action: {action}")

    fields = arguments.get("fields")
    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        return ToolResult.fail(f"Fields must be an object for {action} operation")

    if action == "create":
        if any(_missing(fields.get(key)) for key in spec.required):
            return ToolResult.fail(spec.required_message)
        try:
            record = await gateway.create(spec.collection, fields)
        except GatewayError as exc:
            return ToolResult.fail(f"{spec.plural} operation failed: {exc}")
        return ToolResult.ok(record, spec.success_message(action))

    record_id = coerce_id(arguments.get("id"))
    if record_id is None:
        return ToolResult.fail(spec.id_required(action))

    data: Any = None
    try:
        if action == "get":
            data = await gateway.get(spec.collection, record_id)
        elif action == "update":
            data = await gateway.update(spec.collection, record_id, fields)
        elif action == "delete":
            await gateway.delete(spec.collection, record_id)
        elif action == "archive":
            data = await gateway.archive(spec.collection, record_id)
        elif action == "unarchive":
            data = await gateway.unarchive(spec.collection, record_id)
        else:
            data = await gateway.transition(spec.collection, record_id, action)
    except GatewayError as exc:
        logger.info("%s %s id=%s failed: %s", spec.name, action, record_id, exc)
        return ToolResult.fail(f"{spec.plural} operation failed: {exc}")
    return ToolResult.ok(data, spec.success_message(action))


async def execute_query(
    spec: ResourceToolSpec, arguments: dict[str, Any], gateway: HuduClient
) -> ToolResult:
    """List *spec*'s collection, forwarding only the declared filter keys."""
    params = {key: arguments[key] for key in spec.query_keys if arguments.get(key) is not None}

    if "page" in params:
        page = coerce_page(params["page"])
        if page is None:
            return ToolResult.fail("page must be a positive integer")
        params["page"] = page
    if "page_size" in params:
        page_size = coerce_page(params["page_size"], maximum=MAX_PAGE_SIZE)
        if page_size is None:
            return ToolResult.fail(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        params["page_size"] = page_size

    try:
        records = await gateway.list(spec.collection, **params)
    except GatewayError as exc:
        return ToolResult.fail(f"{spec.plural} query failed: {exc}")
    return ToolResult.ok(records)


# ---------------------------------------------------------------------------
# Resource table
# ---------------------------------------------------------------------------

RESOURCE_TOOLS: tuple[ResourceToolSpec, ...] = (
    ResourceToolSpec(
        name="articles",
        collection="articles",
        description="Create and manage Hudu knowledge base articles",
        query_description="Search and filter Hudu articles with pagination",
        noun="Article",
        plural="Articles",
        actions=STANDARD_ACTIONS,
        required=("name", "content"),
        required_message="Name and content are required for creating articles",
        properties={
            "name": prop("string", "Article name"),
            "content": prop("string", "Article content (HTML/Markdown)"),
            "company_id": COMPANY_ID,
            "folder_id": FOLDER_ID,
            "enable_sharing": prop("boolean", "Enable public sharing"),
        },
        filters={
            "company_id": COMPANY_ID,
            "draft": prop("boolean", "Filter by draft status"),
        },
    ),
    ResourceToolSpec(
        name="assets",
        collection="assets",
        description="Create and manage Hudu IT assets",
        query_description="Search and filter Hudu assets with pagination",
        noun="Asset",
        plural="Assets",
        actions=STANDARD_ACTIONS,
        required=("name", "company_id", "asset_layout_id"),
        required_message="Name, company_id, and asset_layout_id are required for creating assets",
        properties={
            "name": prop("string", "Asset name"),
            "asset_type": prop("string", "Asset type"),
            "company_id": prop("number", "Company ID (required for create)"),
            "asset_layout_id": prop("number", "Asset layout ID (required for create)"),
            "fields": prop("array", "Asset field values based on layout", items={}),
        },
        filters={
            "company_id": COMPANY_ID,
            "asset_layout_id": prop("number", "Filter by asset layout ID"),
            "archived": prop("boolean", "Include archived assets"),
        },
    ),
    ResourceToolSpec(
        name="passwords",
        collection="asset_passwords",
        description="Create and manage Hudu passwords and credentials",
        query_description="Search and filter Hudu passwords with pagination",
        noun="Password",
        plural="Passwords",
        actions=STANDARD_ACTIONS,
        required=("name", "password"),
        required_message="Name and password are required for creating passwords",
        properties={
            "name": prop("string", "Password name"),
            "password": prop("string", "Password value"),
            "username": prop("string", "Username"),
            "url": prop("string", "URL"),
            "description": DESCRIPTION,
            "company_id": COMPANY_ID,
            "passwordable_type": prop("string", "Passwordable type"),
            "passwordable_id": prop("number", "Passwordable ID"),
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="companies",
        collection="companies",
        description="Create and manage Hudu companies",
        query_description="Search and filter Hudu companies with pagination",
        noun="Company",
        plural="Companies",
        actions=tuple(a for a in STANDARD_ACTIONS if a != "delete"),
        required_message="Company name is required for creating companies",
        properties={
            "name": prop("string", "Company name"),
            "nickname": prop("string", "Company nickname"),
            "company_type": prop("string", "Company type"),
            "website": prop("string", "Company website URL"),
            "phone_number": prop("string", "Phone number"),
            "address_line_1": prop("string", "Address line 1"),
            "city": prop("string", "City"),
            "state": prop("string", "State"),
            "zip": prop("string", "ZIP code"),
        },
    ),
    ResourceToolSpec(
        name="asset_layouts",
        collection="asset_layouts",
        description="Create and manage Hudu asset layouts",
        query_description="Search and filter Hudu asset layouts with pagination",
        noun="Asset layout",
        plural="Asset layouts",
        actions=("create", "get", "update"),
        required_message="Name is required for creating asset layouts",
        properties={
            "name": prop("string", "Layout name"),
            "icon": prop("string", "Icon class"),
            "color": prop("string", "Background color"),
            "icon_color": prop("string", "Icon color"),
            "include_passwords": prop("boolean", "Show the passwords section"),
            "include_photos": prop("boolean", "Show the photos section"),
            "include_comments": prop("boolean", "Show the comments section"),
            "include_files": prop("boolean", "Show the files section"),
            "fields": prop("array", "Layout field definitions", items={}),
        },
        filters={"slug": prop("string", "Filter by layout slug")},
    ),
    ResourceToolSpec(
        name="procedures",
        collection="procedures",
        description="Create and manage Hudu procedures with workflow operations",
        query_description="Search and filter Hudu procedures with pagination",
        noun="Procedure",
        plural="Procedures",
        actions=WORKFLOW_ACTIONS,
        required_message="Procedure name is required for creating procedures",
        properties={
            "name": NAME,
            "description": DESCRIPTION,
            "company_id": COMPANY_ID,
            "folder_id": FOLDER_ID,
        },
        filters={"company_id": COMPANY_ID},
        id_messages={
            "create_from_template": (
                "Template procedure ID is required for create_from_template operation"
            ),
        },
    ),
    ResourceToolSpec(
        name="procedure_tasks",
        collection="procedure_tasks",
        description="Manage individual tasks within Hudu procedures",
        query_description="Search and filter procedure tasks with pagination",
        noun="Procedure task",
        plural="Procedure tasks",
        id_label="Task",
        required=("name", "procedure_id"),
        required_message="Task name and procedure_id are required for creating tasks",
        properties={
            "name": NAME,
            "description": DESCRIPTION,
            "position": prop("number", "Task position in procedure"),
            "completed": prop("boolean", "Task completion status"),
            "procedure_id": prop("number", "Procedure ID (required for create)"),
        },
        filters={"procedure_id": prop("number", "Filter by procedure ID")},
    ),
    ResourceToolSpec(
        name="networks",
        collection="networks",
        description="Create and manage Hudu network documentation",
        query_description="Search and filter Hudu networks with pagination",
        noun="Network",
        plural="Networks",
        required=("name", "network_type", "network", "mask"),
        required_message="Name, network_type, network, and mask are required for creating networks",
        properties={
            "name": prop("string", "Network name"),
            "network_type": prop("string", "Network type (required for create)"),
            "network": prop("string", "Network address (required for create)"),
            "mask": prop("string", "Network mask (required for create)"),
            "gateway": prop("string", "Gateway address"),
            "company_id": COMPANY_ID,
            "description": DESCRIPTION,
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="vlans",
        collection="vlans",
        description="Create and manage VLANs within networks",
        query_description="Search and filter VLANs with pagination",
        noun="VLAN",
        plural="VLANs",
        required=("name", "vid"),
        required_message="Name and VID are required for creating VLANs",
        properties={
            "name": prop("string", "VLAN name"),
            "vid": prop("number", "VLAN ID number (required for create)"),
            "network_id": prop("number", "Network ID"),
        },
        filters={"network_id": prop("number", "Filter by network ID")},
    ),
    ResourceToolSpec(
        name="vlan_zones",
        collection="vlan_zones",
        description="Create and manage VLAN zones",
        query_description="Search and filter VLAN zones with pagination",
        noun="VLAN zone",
        plural="VLAN zones",
        required_message="Name is required for creating VLAN zones",
        properties={
            "name": prop("string", "Zone name"),
            "description": DESCRIPTION,
            "company_id": COMPANY_ID,
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="ip_addresses",
        collection="ip_addresses",
        description="Create and manage IP address assignments",
        query_description="Search and filter IP addresses with pagination",
        noun="IP address",
        plural="IP addresses",
        required=("address",),
        required_message="Address is required for creating IP addresses",
        properties={
            "address": prop("string", "IP address (required for create)"),
            "hostname": prop("string", "Hostname"),
            "network_id": prop("number", "Network ID"),
        },
        filters={
            "address": prop("string", "Filter by IP address"),
            "network_id": prop("number", "Filter by network ID"),
        },
    ),
    ResourceToolSpec(
        name="uploads",
        collection="uploads",
        description="Create and manage file uploads",
        query_description="Search and filter uploads with pagination",
        noun="Upload",
        plural="Uploads",
        required=("name", "filename"),
        required_message="Name and filename are required for creating uploads",
        properties={
            "name": prop("string", "Upload name"),
            "filename": prop("string", "File name"),
            "content_type": prop("string", "Content type"),
            "uploadable_type": prop("string", "Uploadable type"),
            "uploadable_id": prop("number", "Uploadable ID"),
        },
    ),
    ResourceToolSpec(
        name="rack_storages",
        collection="rack_storages",
        description="Create and manage rack storage locations",
        query_description="Search and filter rack storages with pagination",
        noun="Rack storage",
        plural="Rack storages",
        required_message="Name is required for creating rack storages",
        properties={
            "name": prop("string", "Rack storage name"),
            "location": prop("string", "Rack storage location"),
            "company_id": COMPANY_ID,
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="rack_storage_items",
        collection="rack_storage_items",
        description="Create and manage items within rack storage",
        query_description="Search and filter rack storage items with pagination",
        noun="Rack storage item",
        plural="Rack storage items",
        required=("name", "rack_storage_id"),
        required_message="Name and rack_storage_id are required for creating rack storage items",
        properties={
            "name": prop("string", "Rack storage item name"),
            "position": prop("string", "Position in rack storage"),
            "rack_storage_id": prop("number", "Rack storage ID"),
        },
        filters={"rack_storage_id": prop("number", "Filter by rack storage ID")},
    ),
    ResourceToolSpec(
        name="public_photos",
        collection="public_photos",
        description="Create and manage public photos",
        query_description="Search and filter public photos with pagination",
        noun="Public photo",
        plural="Public photos",
        required_message="Name is required for creating public photos",
        properties={
            "name": prop("string", "Photo name"),
            "file_url": prop("string", "Photo file URL"),
            "description": DESCRIPTION,
        },
    ),
    ResourceToolSpec(
        name="folders",
        collection="folders",
        description="Create and manage knowledge base folders",
        query_description="Search and filter folders with pagination",
        noun="Folder",
        plural="Folders",
        required_message="Name is required for creating folders",
        properties={
            "name": prop("string", "Folder name"),
            "description": DESCRIPTION,
            "icon": prop("string", "Folder icon"),
            "company_id": COMPANY_ID,
            "parent_folder_id": prop("number", "Parent folder ID"),
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="password_folders",
        collection="password_folders",
        description="Create and manage password folders",
        query_description="Search and filter password folders with pagination",
        noun="Password folder",
        plural="Password folders",
        required_message="Name is required for creating password folders",
        properties={
            "name": prop("string", "Password folder name"),
            "description": DESCRIPTION,
            "company_id": COMPANY_ID,
            "security": prop("string", "Access level (all_users or specific)"),
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="websites",
        collection="websites",
        description="Create and manage monitored websites",
        query_description="Search and filter websites with pagination",
        noun="Website",
        plural="Websites",
        required_message="Name is required for creating websites",
        properties={
            "name": prop("string", "Website URL"),
            "notes": prop("string", "Notes"),
            "paused": prop("boolean", "Pause monitoring"),
            "company_id": COMPANY_ID,
            "disable_dns": prop("boolean", "Disable DNS monitoring"),
            "disable_ssl": prop("boolean", "Disable SSL monitoring"),
            "disable_whois": prop("boolean", "Disable WHOIS monitoring"),
        },
        filters={"slug": prop("string", "Filter by website slug")},
    ),
    ResourceToolSpec(
        name="users",
        collection="users",
        description="Create and manage Hudu users",
        query_description="Search and filter users with pagination",
        noun="User",
        plural="Users",
        required=("email",),
        required_message="Email is required for creating users",
        properties={
            "email": prop("string", "Email address"),
            "first_name": prop("string", "First name"),
            "last_name": prop("string", "Last name"),
            "security_level": prop("string", "Security level"),
        },
        filters={"email": prop("string", "Filter by email address")},
    ),
    ResourceToolSpec(
        name="relations",
        collection="relations",
        description="Create and manage relations between Hudu records",
        query_description="Search and filter relations with pagination",
        noun="Relation",
        plural="Relations",
        required=("fromable_type", "fromable_id", "toable_type", "toable_id"),
        required_message=(
            "fromable_type, fromable_id, toable_type, and toable_id are required "
            "for creating relations"
        ),
        properties={
            "fromable_type": prop("string", "Source record type"),
            "fromable_id": prop("number", "Source record ID"),
            "toable_type": prop("string", "Target record type"),
            "toable_id": prop("number", "Target record ID"),
            "description": DESCRIPTION,
            "is_inverse": prop("boolean", "Create the inverse relation"),
        },
        filters={
            "fromable_type": prop("string", "Filter by source record type"),
            "fromable_id": prop("number", "Filter by source record ID"),
            "toable_type": prop("string", "Filter by target record type"),
            "toable_id": prop("number", "Filter by target record ID"),
        },
    ),
    ResourceToolSpec(
        name="lists",
        collection="lists",
        description="Create and manage custom lists",
        query_description="Search and filter lists with pagination",
        noun="List",
        plural="Lists",
        required_message="Name is required for creating lists",
        properties={
            "name": prop("string", "List name"),
            "list_items": prop("array", "List items", items={}),
        },
        filters={"list_type": prop("string", "Filter by list type")},
    ),
    ResourceToolSpec(
        name="groups",
        collection="groups",
        description="Create and manage user groups",
        query_description="Search and filter groups with pagination",
        noun="Group",
        plural="Groups",
        required_message="Name is required for creating groups",
        properties={
            "name": prop("string", "Group name"),
            "default": prop("boolean", "Assign new users to this group"),
        },
    ),
    ResourceToolSpec(
        name="magic_dash",
        collection="magic_dash",
        description="Create and manage Magic Dash items",
        query_description="Search and filter Magic Dash items with pagination",
        noun="Magic Dash item",
        plural="Magic Dash items",
        required=("title", "company_name"),
        required_message="Title and company_name are required for creating Magic Dash items",
        properties={
            "title": prop("string", "Item title"),
            "company_name": prop("string", "Company name"),
            "message": prop("string", "Message shown on the dashboard"),
            "content": prop("string", "HTML content"),
            "shade": prop("string", "Color shade"),
        },
        filters={"company_id": COMPANY_ID},
    ),
    ResourceToolSpec(
        name="matchers",
        collection="matchers",
        description="Manage integration matchers",
        query_description="Search and filter integration matchers with pagination",
        noun="Matcher",
        plural="Matchers",
        required=("integration_id",),
        required_message="Integration ID is required for creating matchers",
        properties={
            "integration_id": prop("number", "Integration ID"),
            "company_id": COMPANY_ID,
            "potential_company_id": prop("number", "Suggested company ID"),
            "sync_id": prop("string", "External sync ID"),
            "identifier": prop("string", "External identifier"),
        },
        filters={"matcher_type": prop("string", "Filter by matcher type")},
    ),
)
