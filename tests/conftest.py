"""Shared fixtures: a stub Hudu gateway that records every call."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hudu_mcp.gateway.client import HuduClient


@pytest.fixture
def gateway() -> AsyncMock:
    """An ``AsyncMock`` shaped like :class:`HuduClient`.

    Each coroutine method returns an empty result by default; tests set
    ``return_value`` or ``side_effect`` on the methods they care about.
    """
    stub = AsyncMock(spec=HuduClient)
    stub.list.return_value = []
    stub.get.return_value = {}
    stub.create.return_value = {}
    stub.update.return_value = {}
    stub.delete.return_value = None
    return stub
