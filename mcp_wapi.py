"""
Infoblox WAPI MCP Server

Exposes the Infoblox NIOS WAPI (DNS, DHCP and IPAM on an Infoblox grid) as MCP
tools. Each tool maps to a single WAPI object operation: search, create,
update, delete, or an object function such as next_available_ip.

Usage:
    INFOBLOX_HOST=gm.example.com INFOBLOX_USERNAME=admin INFOBLOX_PASSWORD=secret python mcp_wapi.py
    python mcp_wapi.py --http   # HTTP on port 4005
"""

import logging
import os
import sys

import structlog

__version__ = "1.0.0"

LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Configure structlog to use stderr BEFORE importing service clients.
# In stdio transport mode, stdout is reserved exclusively for JSON-RPC protocol messages.
structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL),
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

# Configure standard logging to stderr too
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

from fastmcp import FastMCP  # noqa: E402

from services.wapi_client import InfobloxClient  # noqa: E402
from tools import TOOL_GROUPS  # noqa: E402
from tools.dns import DEFAULT_RETURN_FIELDS  # noqa: E402

INSTRUCTIONS = (
    "Tools for an Infoblox NIOS grid. Search tools return raw WAPI objects including their _ref; "
    "pass that _ref to update, delete, detail and function tools. "
    "Run restart_services after DNS/DHCP changes so they take effect."
)


def create_server(client: InfobloxClient) -> FastMCP:
    """Build the FastMCP server with every WAPI tool group bound to ``client``."""
    mcp = FastMCP("infoblox", instructions=INSTRUCTIONS)

    for register in TOOL_GROUPS:
        register(mcp, client)

    @mcp.resource("infoblox://connection")
    def connection_info() -> dict:
        """WAPI connection settings in use (credentials excluded)"""
        return {
            "base_url": client.base_url,
            "wapi_version": client.wapi_version,
            "username": client.username,
            "verify_tls": client.verify_tls,
            "server_version": __version__,
        }

    @mcp.resource("infoblox://record-types")
    def record_types() -> dict:
        """Supported DNS record object types and the fields returned by default"""
        return {record_type: fields.split(",") for record_type, fields in DEFAULT_RETURN_FIELDS.items()}

    return mcp


def main():
    """Entry point for both `python mcp_wapi.py` and the `infoblox-wapi-mcp` CLI."""
    try:
        client = InfobloxClient()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    mcp = create_server(client)

    # Support both transports:
    #   python mcp_wapi.py          → stdio (for Claude Desktop, Cursor, etc.)
    #   python mcp_wapi.py --http   → HTTP (for remote clients)
    if "--http" in sys.argv:
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "4005"))
        path = os.environ.get("MCP_PATH", "/mcp")

        print("=" * 60, file=sys.stderr)
        print(f"  Infoblox WAPI v{__version__} - MCP Server (HTTP)", file=sys.stderr)
        print("=" * 60, file=sys.stderr)
        print(f"  Endpoint:  http://{host}:{port}{path}", file=sys.stderr)
        print(f"  Grid:      {client.base_url}", file=sys.stderr)
        print("=" * 60, file=sys.stderr)

        mcp.run(transport="http", host=host, port=port, path=path)
    else:
        logger.info("Infoblox MCP server running on stdio")
        mcp.run()


if __name__ == "__main__":
    main()
