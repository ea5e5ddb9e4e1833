"""
WAPI tool groups.

Each module exposes a ``register_*_tools(mcp, client)`` function; new groups
are added by appending to ``TOOL_GROUPS``.
"""

from tools.dhcp import register_dhcp_tools
from tools.dns import register_dns_tools
from tools.grid import register_grid_tools
from tools.network import register_network_tools
from tools.zone import register_zone_tools

TOOL_GROUPS = [
    register_dns_tools,
    register_network_tools,
    register_dhcp_tools,
    register_zone_tools,
    register_grid_tools,
]

__all__ = [
    "register_dhcp_tools",
    "register_dns_tools",
    "register_grid_tools",
    "register_network_tools",
    "register_zone_tools",
    "TOOL_GROUPS",
]
