"""
DHCP tools: fixed addresses (reservations), leases and ranges.
"""

from typing import Any, Dict, List, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxClient
from tools.common import check, created, deleted, format_results, validate_ipv4, validate_mac, validate_ref
from tools.models import DhcpMember, DhcpOption, to_wapi_list

FIXED_ADDRESS_RETURN_FIELDS = "ipv4addr,mac,name,comment,network,network_view,match_client,disable,options"
LEASE_RETURN_FIELDS = "address,hardware,client_hostname,starts,ends,binding_state,network,network_view"
RANGE_RETURN_FIELDS = "start_addr,end_addr,network,network_view,comment,member,disable"

MatchClient = Literal["MAC_ADDRESS", "CLIENT_ID", "CIRCUIT_ID", "REMOTE_ID"]


def register_dhcp_tools(mcp: FastMCP, client: InfobloxClient) -> None:
    """Register DHCP tools on the server."""

    # ==================== Fixed Addresses ====================

    @mcp.tool()
    def get_fixed_addresses(
        ipv4addr: Optional[str] = None,
        mac: Optional[str] = None,
        network: Optional[str] = None,
        network_view: Optional[str] = None,
        comment: Optional[str] = None,
        max_results: int = 100,
    ) -> str:
        """
        Search and list DHCP fixed addresses (reservations) in Infoblox

        Args:
            ipv4addr: IPv4 address to search for
            mac: MAC address to search for (e.g., 00:11:22:33:44:55)
            network: Network in CIDR to filter by
            network_view: Network view
            comment: Comment to search for (regex)
            max_results: Maximum results (default: 100)
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": FIXED_ADDRESS_RETURN_FIELDS,
        }
        if ipv4addr:
            params["ipv4addr"] = ipv4addr
        if mac:
            params["mac"] = mac
        if network:
            params["network"] = network
        if network_view:
            params["network_view"] = network_view
        if comment:
            params["comment~"] = comment

        try:
            return format_results(client.get("fixedaddress", params))
        except Exception as e:
            raise ToolError(f"Error fetching fixed addresses: {e}") from e

    @mcp.tool()
    def create_fixed_address(
        ipv4addr: str,
        mac: str,
        name: Optional[str] = None,
        comment: Optional[str] = None,
        network_view: Optional[str] = None,
        match_client: MatchClient = "MAC_ADDRESS",
        options: Optional[List[DhcpOption]] = None,
    ) -> str:
        """
        Create a DHCP fixed address (reservation) in Infoblox

        Args:
            ipv4addr: IPv4 address to reserve, or 'func:nextavailableip:<network>'
            mac: MAC address of the client (e.g., 00:11:22:33:44:55)
            name: Name for the fixed address
            comment: Description
            network_view: Network view
            match_client: Client matching method: "MAC_ADDRESS" (default), "CLIENT_ID", "CIRCUIT_ID", "REMOTE_ID"
            options: DHCP options, each {"name", "num", "value"}
        """
        check(validate_ipv4(ipv4addr), "creating fixed address")
        check(validate_mac(mac), "creating fixed address")

        data: Dict[str, Any] = {"ipv4addr": ipv4addr, "mac": mac}
        if name:
            data["name"] = name
        if comment:
            data["comment"] = comment
        if network_view:
            data["network_view"] = network_view
        data["match_client"] = match_client
        if options:
            data["options"] = to_wapi_list(options)

        try:
            ref = client.create("fixedaddress", data)
        except Exception as e:
            raise ToolError(f"Error creating fixed address: {e}") from e
        return created("Fixed address", ref)

    @mcp.tool()
    def delete_fixed_address(ref: str) -> str:
        """
        Delete a DHCP fixed address from Infoblox

        Args:
            ref: Object reference of the fixed address to delete (e.g., fixedaddress/ZG5z...)
        """
        check(validate_ref(ref), "deleting fixed address")
        try:
            result = client.delete(ref)
        except Exception as e:
            raise ToolError(f"Error deleting fixed address: {e}") from e
        return deleted("Fixed address", result)

    # ==================== Leases ====================

    @mcp.tool()
    def get_dhcp_leases(
        address: Optional[str] = None,
        network: Optional[str] = None,
        hardware: Optional[str] = None,
        max_results: int = 100,
    ) -> str:
        """Get active DHCP leases from Infoblox. Shows current IP assignments from DHCP."""
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": LEASE_RETURN_FIELDS,
        }
        if address:
            params["address"] = address
        if network:
            params["network"] = network
        if hardware:
            params["hardware"] = hardware

        try:
            return format_results(client.get("lease", params))
        except Exception as e:
            raise ToolError(f"Error fetching leases: {e}") from e

    # ==================== Ranges ====================

    @mcp.tool()
    def get_dhcp_ranges(
        network: Optional[str] = None,
        network_view: Optional[str] = None,
        max_results: int = 100,
    ) -> str:
        """List DHCP ranges (scopes) in Infoblox"""
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": RANGE_RETURN_FIELDS,
        }
        if network:
            params["network"] = network
        if network_view:
            params["network_view"] = network_view

        try:
            return format_results(client.get("range", params))
        except Exception as e:
            raise ToolError(f"Error fetching DHCP ranges: {e}") from e

    @mcp.tool()
    def create_dhcp_range(
        start_addr: str,
        end_addr: str,
        network: Optional[str] = None,
        network_view: Optional[str] = None,
        comment: Optional[str] = None,
        member: Optional[DhcpMember] = None,
    ) -> str:
        """
        Create a DHCP range (scope) in Infoblox

        Args:
            start_addr: Start IP address of the range
            end_addr: End IP address of the range
            network: Network the range belongs to (CIDR)
            network_view: Network view
            comment: Comment
            member: DHCP member to serve this range, {"name": "<member fqdn>"}

        Examples:
            - create_dhcp_range(start_addr="10.0.0.100", end_addr="10.0.0.200", network="10.0.0.0/24")
        """
        check(validate_ipv4(start_addr), "creating DHCP range")
        check(validate_ipv4(end_addr), "creating DHCP range")

        data: Dict[str, Any] = {"start_addr": start_addr, "end_addr": end_addr}
        if network:
            data["network"] = network
        if network_view:
            data["network_view"] = network_view
        if comment:
            data["comment"] = comment
        if member:
            data["member"] = member.to_wapi()

        try:
            ref = client.create("range", data)
        except Exception as e:
            raise ToolError(f"Error creating DHCP range: {e}") from e
        return created("DHCP range", ref)

    @mcp.tool()
    def delete_dhcp_range(ref: str) -> str:
        """
        Delete a DHCP range from Infoblox. Get the reference from get_dhcp_ranges first.

        Args:
            ref: Object reference of the range to delete (e.g., range/ZG5z...)
        """
        check(validate_ref(ref), "deleting DHCP range")
        try:
            result = client.delete(ref)
        except Exception as e:
            raise ToolError(f"Error deleting DHCP range: {e}") from e
        return deleted("DHCP range", result)
