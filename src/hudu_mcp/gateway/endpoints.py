"""Endpoint table — one descriptor per Hudu REST collection.

The backend wraps request and response bodies in a per-resource key
(``{"article": {...}}`` / ``{"articles": [...]}``). The keys do not follow a
single pluralisation rule, so every one is spelled out here.
"""

from __future__ import annotations

from pydantic import BaseModel


class Endpoint(BaseModel):
    """A REST collection and the operations the backend offers on it."""

    model_config = {"frozen": True}

    collection: str
    singular: str
    plural: str
    deletable: bool = True
    archivable: bool = False
    transitions: frozenset[str] = frozenset()


def _ep(
    collection: str,
    singular: str,
    plural: str | None = None,
    *,
    deletable: bool = True,
    archivable: bool = False,
    transitions: tuple[str, ...] = (),
) -> Endpoint:
    return Endpoint(
        collection=collection,
        singular=singular,
        plural=plural or collection,
        deletable=deletable,
        archivable=archivable,
        transitions=frozenset(transitions),
    )


ENDPOINTS: dict[str, Endpoint] = {
    ep.collection: ep
    for ep in (
        # Archivable resources
        _ep("articles", "article", archivable=True),
        _ep("assets", "asset", archivable=True),
        _ep("asset_passwords", "asset_password", archivable=True),
        _ep("companies", "company", archivable=True, deletable=False),
        # Layouts cannot be deleted through the API
        _ep("asset_layouts", "asset_layout", deletable=False),
        # Workflow
        _ep(
            "procedures",
            "procedure",
            transitions=("kickoff", "duplicate", "create_from_template"),
        ),
        _ep("procedure_tasks", "procedure_task"),
        # Networking
        _ep("networks", "network"),
        _ep("vlans", "vlan"),
        _ep("vlan_zones", "vlan_zone"),
        _ep("ip_addresses", "ip_address"),
        # Storage
        _ep("uploads", "upload"),
        _ep("rack_storages", "rack_storage"),
        _ep("rack_storage_items", "rack_storage_item"),
        _ep("public_photos", "public_photo"),
        # Organisation
        _ep("folders", "folder"),
        _ep("password_folders", "password_folder"),
        _ep("websites", "website"),
        _ep("users", "user"),
        _ep("relations", "relation"),
        _ep("lists", "list"),
        _ep("groups", "group"),
        _ep("magic_dash", "magic_dash", "magic_dash"),
        _ep("matchers", "matcher"),
    )
}


def endpoint(collection: str) -> Endpoint:
    """Look up an endpoint by collection name; ``KeyError`` if unknown."""
    try:
        return ENDPOINTS[collection]
    except KeyError:
        msg = f"Unknown Hudu collection: {collection}"
        raise KeyError(msg) from None
