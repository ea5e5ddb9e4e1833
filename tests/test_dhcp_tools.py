"""Tests for DHCP tools via FastMCP Client."""

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxAPIError
from tests.conftest import parse_tool_result, tool_text

FIXED = {"_ref": "fixedaddress/ZG5zLmZpeGVkX2FkZHJlc3MkMTAuMC4wLjUwLjAuLg:10.0.0.50/default", "ipv4addr": "10.0.0.50"}
RANGE_REF = "range/ZG5zLmRoY3BfcmFuZ2UkMTAuMC4wLjEwMC8xMC4wLjAuMjAwLy8vMC8:10.0.0.100/10.0.0.200/default"


class TestFixedAddresses:
    async def test_search(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.get.return_value = [FIXED]
        async with Client(mcp_server) as c:
            r = parse_tool_result(
                await c.call_tool("get_fixed_addresses", {"mac": "00:11:22:33:44:55", "comment": "printer"})
            )
        assert r == [FIXED]
        object_type, params = mock_infoblox_client.get.call_args.args
        assert object_type == "fixedaddress"
        assert params["mac"] == "00:11:22:33:44:55"
        assert params["comment~"] == "printer"

    async def test_create_defaults_match_client(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.create.return_value = FIXED["_ref"]
        async with Client(mcp_server) as c:
            text = tool_text(
                await c.call_tool(
                    "create_fixed_address", {"ipv4addr": "10.0.0.50", "mac": "00:11:22:33:44:55", "name": "printer"}
                )
            )
        assert text == f"Fixed address created successfully.\nReference: {FIXED['_ref']}"
        mock_infoblox_client.create.assert_called_once_with(
            "fixedaddress",
            {"ipv4addr": "10.0.0.50", "mac": "00:11:22:33:44:55", "name": "printer", "match_client": "MAC_ADDRESS"},
        )

    async def test_create_invalid_mac(self, mcp_server, mock_infoblox_client):
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="Error creating fixed address: Invalid MAC"):
                await c.call_tool("create_fixed_address", {"ipv4addr": "10.0.0.50", "mac": "00:11:22"})
        mock_infoblox_client.create.assert_not_called()

    async def test_create_invalid_match_client(self, mcp_server, mock_infoblox_client):
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="literal_error"):
                await c.call_tool(
                    "create_fixed_address",
                    {"ipv4addr": "10.0.0.50", "mac": "00:11:22:33:44:55", "match_client": "HOSTNAME"},
                )

    async def test_delete(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.delete.return_value = FIXED["_ref"]
        async with Client(mcp_server) as c:
            text = tool_text(await c.call_tool("delete_fixed_address", {"ref": FIXED["_ref"]}))
        assert text.startswith("Fixed address deleted successfully.")


class TestLeases:
    async def test_search(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.get.return_value = [{"address": "10.0.0.77", "binding_state": "ACTIVE"}]
        async with Client(mcp_server) as c:
            r = parse_tool_result(await c.call_tool("get_dhcp_leases", {"network": "10.0.0.0/24"}))
        assert r[0]["binding_state"] == "ACTIVE"
        object_type, params = mock_infoblox_client.get.call_args.args
        assert object_type == "lease"
        assert params["network"] == "10.0.0.0/24"
        assert "client_hostname" in params["_return_fields"]

    async def test_api_error(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.get.side_effect = InfobloxAPIError("Infoblox API error (403): forbidden", 403)
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="Error fetching leases"):
                await c.call_tool("get_dhcp_leases")


class TestRanges:
    async def test_list(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.get.return_value = []
        async with Client(mcp_server) as c:
            r = parse_tool_result(await c.call_tool("get_dhcp_ranges", {"network_view": "default"}))
        assert r == []
        assert mock_infoblox_client.get.call_args.args[0] == "range"

    async def test_create_with_member(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.create.return_value = RANGE_REF
        async with Client(mcp_server) as c:
            text = tool_text(
                await c.call_tool(
                    "create_dhcp_range",
                    {
                        "start_addr": "10.0.0.100",
                        "end_addr": "10.0.0.200",
                        "network": "10.0.0.0/24",
                        "member": {"name": "dhcp1.example.com"},
                    },
                )
            )
        assert text.startswith("DHCP range created successfully.")
        data = mock_infoblox_client.create.call_args.args[1]
        assert data["member"] == {"_struct": "dhcpmember", "name": "dhcp1.example.com"}

    async def test_create_invalid_start(self, mcp_server, mock_infoblox_client):
        async with Client(mcp_server) as c:
            with pytest.raises(ToolError, match="Invalid IPv4 address"):
                await c.call_tool("create_dhcp_range", {"start_addr": "10.0.0", "end_addr": "10.0.0.200"})
        mock_infoblox_client.create.assert_not_called()

    async def test_delete(self, mcp_server, mock_infoblox_client):
        mock_infoblox_client.delete.return_value = RANGE_REF
        async with Client(mcp_server) as c:
            text = tool_text(await c.call_tool("delete_dhcp_range", {"ref": RANGE_REF}))
        assert text == f"DHCP range deleted successfully.\nReference: {RANGE_REF}"
