"""ToolRegistry — immutable name-to-(descriptor, executor) table."""

from __future__ import annotations

from collections.abc import Iterable
from functools import partial
from types import MappingProxyType
from typing import NamedTuple

from hudu_mcp.tools.admin import ADMIN_TOOL, execute_admin
from hudu_mcp.tools.company_assets import COMPANY_ASSETS_TOOL, execute_company_assets
from hudu_mcp.tools.crud import RESOURCE_TOOLS, execute_query, execute_resource
from hudu_mcp.tools.models import Executor, ToolDescriptor
from hudu_mcp.tools.navigation import NAVIGATION_TOOL, execute_navigation
from hudu_mcp.tools.search import SEARCH_TOOL, execute_search


class RegisteredTool(NamedTuple):
    descriptor: ToolDescriptor
    executor: Executor


class ToolRegistry:
    """Read-only tool table, built once and shared by every request.

    Usage::

        registry = build_registry()
        registry.descriptors()          # ordered list for tools/list
        tool = registry.get("articles")
        result = await tool.executor({"action": "get", "id": 1}, gateway)
    """

    def __init__(self, entries: Iterable[tuple[ToolDescriptor, Executor]]) -> None:
        table: dict[str, RegisteredTool] = {}
        for descriptor, executor in entries:
            if descriptor.name in table:
                msg = f"Duplicate tool name: {descriptor.name}"
                raise ValueError(msg)
            table[descriptor.name] = RegisteredTool(descriptor, executor)
        self._tools = MappingProxyType(table)

    def descriptors(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        return [tool.descriptor for tool in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> RegisteredTool | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry() -> ToolRegistry:
    """Build the full Hudu tool table."""
    entries: list[tuple[ToolDescriptor, Executor]] = []
    for spec in RESOURCE_TOOLS:
        entries.append((spec.descriptor(), partial(execute_resource, spec)))
        entries.append((spec.query_descriptor(), partial(execute_query, spec)))
    entries.append((SEARCH_TOOL, execute_search))
    entries.append((ADMIN_TOOL, execute_admin))
    entries.append((NAVIGATION_TOOL, execute_navigation))
    entries.append((COMPANY_ASSETS_TOOL, execute_company_assets))
    return ToolRegistry(entries)
