"""Tests for DNS zone tools via FastMCP Client."""

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxAPIError
from tests.conftest import parse_tool_result, tool_text

ZONE = {"_ref": "zone_auth/ZG5zLnpvbmUkLl9kZWZhdWx0LmNvbS5leGFtcGxl:example.com/default", "fqdn": "example.com"}


class TestGetZones:
    async def test_filters(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.get.return_value = [ZONE]
        async with Client(mcp_server) as c:
            r = parse_tool_result(await c.call_tool("get_zones", {"fqdn": "example", "zone_format": "FORWARD"}))
        assert r == [ZONE]
        object_type, params = mock_infoblox_client.get.call_args.args
        assert object_type == "zone_auth"
        assert params["fqdn~"] == "example"
        assert params["zone_format"] == "FORWARD"

    async def test_invalid_zone_format(self, mcp_server, mock_infoblox_client):
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="literal_error"):
                await c.call_tool("get_zones", {"zone_format": "REVERSE"})


class TestCreateZone:
    async def test_with_grid_primary(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.create.return_value = ZONE["_ref"]
        async with Client(mcp_server) as c:
            text = tool_text(
                await c.call_tool(
                    "create_zone",
                    {
                        "fqdn": "example.com",
                        "grid_primary": [{"name": "infoblox.localdomain"}],
                        "grid_secondaries": [{"name": "ns2.example.com", "_struct": "memberserver"}],
                    },
                )
            )
        assert text == f"Zone created successfully.\nReference: {ZONE['_ref']}"
        object_type, data = mock_infoblox_client.create.call_args.args
        assert object_type == "zone_auth"
        assert data == {
            "fqdn": "example.com",
            "zone_format": "FORWARD",
            "grid_primary": [{"_struct": "memberserver", "name": "infoblox.localdomain"}],
            "grid_secondaries": [{"_struct": "memberserver", "name": "ns2.example.com"}],
        }

    async def test_reverse_zone_with_ns_group(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.create.return_value = "zone_auth/rev"
        async with Client(mcp_server) as c:
            await c.call_tool("create_zone", {"fqdn": "10.10.0.0/16", "zone_format": "IPv4", "ns_group": "default"})
        data = mock_infoblox_client.create.call_args.args[1]
        assert data["zone_format"] == "IPv4"
        assert data["ns_group"] == "default"

    async def test_api_error(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.create.side_effect = InfobloxAPIError("Infoblox API error (400): duplicate", 400)
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="Error creating zone"):
                await c.call_tool("create_zone", {"fqdn": "example.com"})


class TestDeleteZone:
    async def test_happy_path(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.delete.return_value = ZONE["_ref"]
        async with Client(mcp_server) as c:
            text = tool_text(await c.call_tool("delete_zone", {"ref": ZONE["_ref"]}))
        assert text.startswith("Zone deleted successfully.")
        mock_infoblox_client.delete.assert_called_once_with(ZONE["_ref"])

    async def test_malformed_ref(self, mcp_server, mock_infoblox_client):
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="Error deleting zone: Invalid object reference"):
                await c.call_tool("delete_zone", {"ref": ""})
        mock_infoblox_client.delete.assert_not_called()
