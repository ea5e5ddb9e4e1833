"""
DNS zone tools: authoritative zones (zone_auth).
"""

from typing import Any, Dict, List, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxClient
from tools.common import check, created, deleted, format_results, validate_ref
from tools.models import MemberServer, to_wapi_list

ZONE_RETURN_FIELDS = "fqdn,view,zone_format,comment,disable,ns_group,soa_email,network_view"

ZoneFormat = Literal["FORWARD", "IPv4", "IPv6"]


def register_zone_tools(mcp: FastMCP, client: InfobloxClient) -> None:
    """Register DNS zone tools on the server."""

    @mcp.tool()
    def get_zones(
        fqdn: Optional[str] = None,
        view: Optional[str] = None,
        zone_format: Optional[ZoneFormat] = None,
        max_results: int = 100,
    ) -> str:
        """
        Search and list DNS authoritative zones in Infoblox

        Args:
            fqdn: Zone FQDN to search for (supports regex)
            view: DNS view to filter by
            zone_format: Zone format: "FORWARD", "IPv4" (reverse), or "IPv6" (reverse)
            max_results: Maximum results (default: 100)
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": ZONE_RETURN_FIELDS,
        }
        if fqdn:
            params["fqdn~"] = fqdn
        if view:
            params["view"] = view
        if zone_format:
            params["zone_format"] = zone_format

        try:
            return format_results(client.get("zone_auth", params))
        except Exception as e:
            raise ToolError(f"Error fetching zones: {e}") from e

    @mcp.tool()
    def create_zone(
        fqdn: str,
        view: Optional[str] = None,
        zone_format: ZoneFormat = "FORWARD",
        comment: Optional[str] = None,
        grid_primary: Optional[List[MemberServer]] = None,
        grid_secondaries: Optional[List[MemberServer]] = None,
        ns_group: Optional[str] = None,
    ) -> str:
        """
        Create a DNS authoritative zone in Infoblox

        Args:
            fqdn: Zone FQDN (e.g., example.com, or 168.192.in-addr.arpa / 192.168.0.0/16 for reverse)
            view: DNS view
            zone_format: "FORWARD" (default), "IPv4" or "IPv6"
            comment: Comment
            grid_primary: Primary DNS server members, each {"name": "<member fqdn>"}
            grid_secondaries: Secondary DNS server members, each {"name": "<member fqdn>"}
            ns_group: Name server group name (instead of explicit primaries/secondaries)

        Examples:
            - create_zone(fqdn="lab.example.com", grid_primary=[{"name": "infoblox.localdomain"}])
            - create_zone(fqdn="10.10.0.0/16", zone_format="IPv4", ns_group="default")
        """
        data: Dict[str, Any] = {"fqdn": fqdn, "zone_format": zone_format}
        if view:
            data["view"] = view
        if comment:
            data["comment"] = comment
        if grid_primary:
            data["grid_primary"] = to_wapi_list(grid_primary)
        if grid_secondaries:
            data["grid_secondaries"] = to_wapi_list(grid_secondaries)
        if ns_group:
            data["ns_group"] = ns_group

        try:
            ref = client.create("zone_auth", data)
        except Exception as e:
            raise ToolError(f"Error creating zone: {e}") from e
        return created("Zone", ref)

    @mcp.tool()
    def delete_zone(ref: str) -> str:
        """
        Delete a DNS authoritative zone from Infoblox

        Args:
            ref: Object reference of the zone to delete (e.g., zone_auth/ZG5z...)
        """
        check(validate_ref(ref), "deleting zone")
        try:
            result = client.delete(ref)
        except Exception as e:
            raise ToolError(f"Error deleting zone: {e}") from e
        return deleted("Zone", result)
