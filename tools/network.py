"""
IPAM network tools: networks, next available IP and the IPv4 address space.
"""

from typing import Any, Dict, List, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxClient
from tools.common import check, created, deleted, format_results, validate_cidr, validate_ip, validate_ref
from tools.models import DhcpMember, DhcpOption, to_wapi_list

NETWORK_RETURN_FIELDS = "network,comment,network_view,members,options,extattrs,utilization"
NETWORK_DETAIL_RETURN_FIELDS = (
    "network,comment,network_view,members,options,extattrs,"
    "dhcp_utilization,dynamic_hosts,static_hosts,total_hosts,utilization"
)
IPV4ADDRESS_RETURN_FIELDS = "ip_address,status,names,types,objects,mac_address,network,network_view,usage"


def register_network_tools(mcp: FastMCP, client: InfobloxClient) -> None:
    """Register IPAM network tools on the server."""

    @mcp.tool()
    def get_networks(
        network: Optional[str] = None,
        network_view: Optional[str] = None,
        comment: Optional[str] = None,
        max_results: int = 100,
        return_fields: Optional[str] = None,
    ) -> str:
        """
        Search and list networks in Infoblox IPAM. Returns network address, comment, view, and utilization info.

        Args:
            network: Network in CIDR notation to search for (e.g., 10.0.0.0/24). Supports regex.
            network_view: Network view to filter by
            comment: Comment to search for (regex)
            max_results: Maximum results to return (default: 100)
            return_fields: Comma-separated return fields
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": return_fields or NETWORK_RETURN_FIELDS,
        }
        if network:
            params["network~"] = network
        if network_view:
            params["network_view"] = network_view
        if comment:
            params["comment~"] = comment

        try:
            return format_results(client.get("network", params))
        except Exception as e:
            raise ToolError(f"Error fetching networks: {e}") from e

    @mcp.tool()
    def create_network(
        network: str,
        network_view: Optional[str] = None,
        comment: Optional[str] = None,
        members: Optional[List[DhcpMember]] = None,
        options: Optional[List[DhcpOption]] = None,
    ) -> str:
        """
        Create a new network in Infoblox IPAM

        Args:
            network: Network address in CIDR notation (e.g., 192.168.1.0/24)
            network_view: Network view (defaults to 'default')
            comment: Description for the network
            members: DHCP member assignments, each {"name": "<member fqdn>"}
            options: DHCP options (routers, domain-name-servers, etc.), each {"name", "num", "value"}

        Examples:
            - create_network(network="10.20.3.0/24", comment="Web servers")
            - create_network(network="10.20.4.0/24", options=[{"name": "routers", "num": 3, "value": "10.20.4.1"}])
        """
        check(validate_cidr(network), "creating network")

        data: Dict[str, Any] = {"network": network}
        if network_view:
            data["network_view"] = network_view
        if comment:
            data["comment"] = comment
        if members:
            data["members"] = to_wapi_list(members)
        if options:
            data["options"] = to_wapi_list(options)

        try:
            ref = client.create("network", data)
        except Exception as e:
            raise ToolError(f"Error creating network: {e}") from e
        return created("Network", ref)

    @mcp.tool()
    def delete_network(ref: str) -> str:
        """
        Delete a network from Infoblox IPAM. Get the reference from get_networks first.

        Args:
            ref: Object reference of the network to delete (e.g., network/ZG5z...)
        """
        check(validate_ref(ref), "deleting network")
        try:
            result = client.delete(ref)
        except Exception as e:
            raise ToolError(f"Error deleting network: {e}") from e
        return deleted("Network", result)

    @mcp.tool()
    def get_next_available_ip(
        network_ref: str,
        num: int = 1,
        exclude: Optional[List[str]] = None,
    ) -> str:
        """
        Get the next available IP address(es) from a network. Use get_networks first to find the network reference.

        Args:
            network_ref: Object reference of the network (e.g., network/ZG5z...)
            num: Number of available IPs to retrieve (default: 1)
            exclude: IP addresses to exclude from results
        """
        check(validate_ref(network_ref), "getting next available IP")
        for ip in exclude or []:
            check(validate_ip(ip), "getting next available IP")

        data: Dict[str, Any] = {"num": num}
        if exclude:
            data["exclude"] = exclude

        try:
            return format_results(client.call_function(network_ref, "next_available_ip", data))
        except Exception as e:
            raise ToolError(f"Error getting next available IP: {e}") from e

    @mcp.tool()
    def search_ip_addresses(
        ip_address: Optional[str] = None,
        network: Optional[str] = None,
        status: Optional[Literal["USED", "UNUSED"]] = None,
        network_view: Optional[str] = None,
        max_results: int = 100,
    ) -> str:
        """
        Search the IPv4 address space in Infoblox IPAM. Find used/unused IPs, check IP status,
        and see what objects use an IP.

        Args:
            ip_address: Specific IP address to look up
            network: Network in CIDR to search within
            status: Filter by address status: "USED" or "UNUSED"
            network_view: Network view to search in
            max_results: Maximum results (default: 100)
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": IPV4ADDRESS_RETURN_FIELDS,
        }
        if ip_address:
            params["ip_address"] = ip_address
        if network:
            params["network"] = network
        if status:
            params["status"] = status
        if network_view:
            params["network_view"] = network_view

        try:
            return format_results(client.get("ipv4address", params))
        except Exception as e:
            raise ToolError(f"Error searching IP addresses: {e}") from e

    @mcp.tool()
    def get_network_details(ref: str, return_fields: Optional[str] = None) -> str:
        """Get detailed information about a specific network including DHCP utilization statistics"""
        check(validate_ref(ref), "fetching network details")
        params = {"_return_fields": return_fields or NETWORK_DETAIL_RETURN_FIELDS}
        try:
            return format_results(client.get_by_ref(ref, params))
        except Exception as e:
            raise ToolError(f"Error fetching network details: {e}") from e
