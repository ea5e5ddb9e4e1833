"""
Grid administration tools: grid info, members, service restarts, views,
extensible attributes and cross-object lookups.
"""

from typing import Any, Dict, Literal, Optional

import structlog
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxClient
from tools.common import check, format_results, validate_ref

logger = structlog.get_logger(__name__)

GRID_RETURN_FIELDS = "name,service_status,ntp_setting,dns_resolver_setting,email_setting"
MEMBER_RETURN_FIELDS = (
    "host_name,config_addr_type,platform,service_type_configuration,node_info,vip_setting,service_status"
)
NETWORK_VIEW_RETURN_FIELDS = "name,comment,is_default,extattrs"
DNS_VIEW_RETURN_FIELDS = "name,comment,is_default,network_view,extattrs"
EA_DEFINITION_RETURN_FIELDS = "name,comment,type,default_value,list_values,flags"


def register_grid_tools(mcp: FastMCP, client: InfobloxClient) -> None:
    """Register grid administration tools on the server."""

    @mcp.tool()
    def get_grid_info() -> str:
        """Get Infoblox grid information and configuration"""
        try:
            return format_results(client.get("grid", {"_return_fields": GRID_RETURN_FIELDS}))
        except Exception as e:
            raise ToolError(f"Error fetching grid info: {e}") from e

    @mcp.tool()
    def get_members(name: Optional[str] = None, max_results: int = 100) -> str:
        """
        List Infoblox grid members and their status

        Args:
            name: Member hostname to search for (regex)
            max_results: Maximum results (default: 100)
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": MEMBER_RETURN_FIELDS,
        }
        if name:
            params["host_name~"] = name

        try:
            return format_results(client.get("member", params))
        except Exception as e:
            raise ToolError(f"Error fetching members: {e}") from e

    @mcp.tool()
    def restart_services(
        member: Optional[str] = None,
        service: Literal["ALL", "DNS", "DHCP", "DHCPV4", "DHCPV6"] = "ALL",
        mode: Literal["GROUPED", "SEQUENTIAL", "SIMULTANEOUS"] = "GROUPED",
    ) -> str:
        """
        Restart DNS/DHCP services on the Infoblox grid. Required after configuration changes to take effect.

        Args:
            member: Specific member FQDN to restart. Omit to restart all members with pending changes.
            service: Which service to restart: "ALL" (default), "DNS", "DHCP", "DHCPV4", "DHCPV6"
            mode: Restart mode: "GROUPED" (default), "SEQUENTIAL", "SIMULTANEOUS"
        """
        try:
            grids = client.get("grid")
            grid_ref = grids[0]["_ref"] if grids else None
        except Exception as e:
            raise ToolError(f"Error restarting services: {e}") from e
        if not grid_ref:
            raise ToolError("Error: Could not find grid object")

        data: Dict[str, Any] = {"restart_option": mode, "service_option": service}
        if member:
            data["member_order"] = "SPECIFICALLY"
            data["members"] = [member]

        try:
            result = client.call_function(grid_ref, "restartservices", data)
        except Exception as e:
            raise ToolError(f"Error restarting services: {e}") from e

        logger.info("grid_services_restart_requested", member=member, service=service, mode=mode)
        return f"Services restart initiated.\n{format_results(result)}"

    @mcp.tool()
    def get_object_by_ref(ref: str, return_fields: Optional[str] = None) -> str:
        """
        Get any Infoblox object by its reference string. Useful for retrieving full details of an object.

        Args:
            ref: Object reference string (e.g., record:a/ZG5z..., network/ZG5z...)
            return_fields: Comma-separated list of fields to return
        """
        check(validate_ref(ref), "fetching object")
        params = {"_return_fields": return_fields} if return_fields else {}
        try:
            return format_results(client.get_by_ref(ref, params))
        except Exception as e:
            raise ToolError(f"Error fetching object: {e}") from e

    @mcp.tool()
    def global_search(
        search_string: str,
        object_type: Optional[str] = None,
        max_results: int = 100,
    ) -> str:
        """
        Search across all Infoblox object types. Finds records, networks, and other objects matching a search string.

        Args:
            search_string: String to search for across all objects (IP, hostname, MAC, comment, etc.)
            object_type: Limit search to a specific object type (e.g., record:a, network, fixedaddress)
            max_results: Maximum results (default: 100)
        """
        params: Dict[str, Any] = {"_max_results": max_results, "search_string": search_string}
        if object_type:
            params["objtype"] = object_type

        try:
            return format_results(client.get("search", params))
        except Exception as e:
            raise ToolError(f"Error performing global search: {e}") from e

    @mcp.tool()
    def get_network_views(name: Optional[str] = None) -> str:
        """List network views configured in Infoblox"""
        params = {"_return_fields": NETWORK_VIEW_RETURN_FIELDS}
        if name:
            params["name"] = name
        try:
            return format_results(client.get("networkview", params))
        except Exception as e:
            raise ToolError(f"Error fetching network views: {e}") from e

    @mcp.tool()
    def get_dns_views(name: Optional[str] = None) -> str:
        """List DNS views configured in Infoblox"""
        params = {"_return_fields": DNS_VIEW_RETURN_FIELDS}
        if name:
            params["name"] = name
        try:
            return format_results(client.get("view", params))
        except Exception as e:
            raise ToolError(f"Error fetching DNS views: {e}") from e

    @mcp.tool()
    def get_extensible_attribute_definitions(name: Optional[str] = None) -> str:
        """
        List extensible attribute definitions configured in Infoblox.
        Extensible attributes are custom metadata fields.

        Args:
            name: Attribute name to search for
        """
        params = {"_return_fields": EA_DEFINITION_RETURN_FIELDS}
        if name:
            params["name"] = name
        try:
            return format_results(client.get("extensibleattributedef", params))
        except Exception as e:
            raise ToolError(f"Error fetching extensible attributes: {e}") from e
