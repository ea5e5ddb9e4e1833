"""Shared fixtures for the Infoblox WAPI MCP test suite."""

import json
import os
from unittest.mock import MagicMock

import pytest

# Set env vars BEFORE importing mcp_wapi so a stray .env cannot point tests at a real grid.
os.environ.setdefault("INFOBLOX_HOST", "gm.test.local")
os.environ.setdefault("INFOBLOX_USERNAME", "admin")
os.environ.setdefault("INFOBLOX_PASSWORD", "test_password_for_ci")

import mcp_wapi  # noqa: E402

# ── fixtures ─────────────────────────────────────────────────────────


@pytest.fixture()
def mock_infoblox_client():
    """A MagicMock standing in for ``InfobloxClient``."""
    mock = MagicMock()
    mock.base_url = "https://gm.test.local/wapi/v2.12"
    mock.wapi_version = "2.12"
    mock.username = "admin"
    mock.verify_tls = False
    return mock


@pytest.fixture()
def mcp_server(mock_infoblox_client):
    """Return a FastMCP server bound to the mocked client for Client-based testing."""
    return mcp_wapi.create_server(mock_infoblox_client)


def tool_text(result) -> str:
    """Return the text of a FastMCP Client ``CallToolResult``."""
    return result.content[0].text


def parse_tool_result(result):
    """Parse the JSON text of a query tool result."""
    return json.loads(tool_text(result))
