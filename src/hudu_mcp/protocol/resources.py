"""Read-only resources — ``res://<kind>/list`` and ``res://<kind>/<id>`` views.

``hudu://`` is accepted as an alias scheme for clients configured against
the historical URIs.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from hudu_mcp.protocol.errors import InvalidRequestError
from hudu_mcp.tools.schema import coerce_id

if TYPE_CHECKING:
    from hudu_mcp.gateway.client import HuduClient

SCHEME = "res"
ALIAS_SCHEMES = frozenset({SCHEME, "hudu"})
MIME_TYPE = "application/json"


class ResourceKind(BaseModel):
    """One readable resource kind and the gateway collection behind it."""

    model_config = {"frozen": True}

    kind: str
    title: str
    description: str
    collection: str | None = None
    readable_by_id: bool = True


class ResourceDescriptor(BaseModel):
    """A resource entry as returned by ``resources/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    uri: str
    name: str
    description: str = ""
    mime_type: str = Field(default=MIME_TYPE, alias="mimeType")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def _kind(
    kind: str, title: str, description: str, collection: str | None, *, by_id: bool = True
) -> ResourceKind:
    return ResourceKind(
        kind=kind,
        title=title,
        description=description,
        collection=collection,
        readable_by_id=by_id,
    )


RESOURCE_KINDS: dict[str, ResourceKind] = {
    k.kind: k
    for k in (
        _kind("article", "Hudu Articles", "List of all knowledge base articles", "articles"),
        _kind("asset", "Hudu Assets", "List of all IT assets", "assets"),
        _kind("password", "Hudu Passwords", "List of all password entries", "asset_passwords"),
        _kind("company", "Hudu Companies", "List of all companies", "companies"),
        _kind("asset-layout", "Hudu Asset Layouts", "List of all asset layout templates", "asset_layouts"),
        _kind("activity-log", "Hudu Activity Logs", "List of all activity logs", None, by_id=False),
        _kind("folder", "Hudu Folders", "List of all folders", "folders"),
        _kind("user", "Hudu Users", "List of all users", "users"),
        _kind("procedure", "Hudu Procedures", "List of all procedures", "procedures"),
        _kind("procedure-task", "Hudu Procedure Tasks", "List of all procedure tasks", "procedure_tasks"),
        _kind("network", "Hudu Networks", "List of all networks", "networks"),
        _kind("password-folder", "Hudu Password Folders", "List of all password folders", "password_folders"),
        _kind("upload", "Hudu Uploads", "List of all uploads", "uploads"),
        _kind("website", "Hudu Websites", "List of all monitored websites", "websites"),
        _kind("vlan", "Hudu VLANs", "List of all VLANs", "vlans"),
        _kind("vlan-zone", "Hudu VLAN Zones", "List of all VLAN zones", "vlan_zones"),
        _kind("ip-address", "Hudu IP Addresses", "List of all IP addresses", "ip_addresses"),
        _kind("relation", "Hudu Relations", "List of all relations", "relations"),
        _kind("list", "Hudu Lists", "List of all custom lists", "lists"),
        _kind("group", "Hudu Groups", "List of all user groups", "groups"),
        _kind("magic-dash", "Hudu Magic Dash", "List of all Magic Dash items", "magic_dash"),
        _kind("matcher", "Hudu Matchers", "List of all integration matchers", "matchers"),
        _kind("expiration", "Hudu Expirations", "List of all expirations", None, by_id=False),
        _kind("export", "Hudu Exports", "List of all exports", None, by_id=False),
        _kind("rack-storage", "Hudu Rack Storages", "List of all rack storages", "rack_storages"),
        _kind("rack-storage-item", "Hudu Rack Storage Items", "List of all rack storage items", "rack_storage_items"),
        _kind("public-photo", "Hudu Public Photos", "List of all public photos", "public_photos"),
    )
}


def resource_descriptors() -> list[ResourceDescriptor]:
    """Static descriptors for ``resources/list``."""
    return [
        ResourceDescriptor(uri=f"{SCHEME}://{k.kind}/list", name=k.title, description=k.description)
        for k in RESOURCE_KINDS.values()
    ]


def parse_resource_uri(uri: Any) -> tuple[ResourceKind, int | None]:
    """Split *uri* into its kind and optional record id.

    ``res://article``, ``res://article/list`` and ``res://article/42`` are all
    valid. Anything else raises :class:`InvalidRequestError`.
    """
    if not isinstance(uri, str) or not uri:
        raise InvalidRequestError("Resource URI is required")

    scheme, sep, rest = uri.partition("://")
    if not sep or scheme not in ALIAS_SCHEMES:
        raise InvalidRequestError(f"Unsupported resource URI scheme: {uri}")

    name, _, tail = rest.rstrip("/").partition("/")
    kind = RESOURCE_KINDS.get(name)
    if kind is None:
        raise InvalidRequestError(f"Unknown resource: {uri}")
    if tail in ("", "list"):
        return kind, None

    record_id = coerce_id(tail)
    if record_id is None or not kind.readable_by_id:
        raise InvalidRequestError(f"Invalid {kind.kind} URI: {uri}")
    return kind, record_id


async def read_resource(uri: str, gateway: HuduClient) -> dict[str, Any]:
    """Fetch *uri* through the gateway and wrap it as ``{"contents": [...]}``."""
    kind, record_id = parse_resource_uri(uri)

    payload: Any
    if kind.kind == "activity-log":
        payload = await gateway.activity_logs()
    elif kind.kind == "expiration":
        payload = await gateway.expirations()
    elif kind.kind == "export":
        payload = await gateway.exports()
    elif record_id is None:
        payload = await gateway.list(kind.collection)  # type: ignore[arg-type]
    else:
        payload = await gateway.get(kind.collection, record_id)  # type: ignore[arg-type]

    return {
        "contents": [
            {"uri": uri, "mimeType": MIME_TYPE, "text": json.dumps(payload, indent=2, default=str)}
        ]
    }
