"""CLI test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def quiet_logging() -> Iterator[MagicMock]:
    """Keep ``main`` from rebinding the root logger to CliRunner's stderr."""
    with patch("hudu_mcp.cli.configure_logging") as configure:
        yield configure
