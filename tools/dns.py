"""
DNS record tools: search, create, update and delete WAPI record objects.
"""

from typing import Any, Dict, List, Literal, Optional

import structlog
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from services.wapi_client import InfobloxClient
from tools.common import check, created, deleted, format_results, set_ttl, updated, validate_ref
from tools.models import HostIPv4Addr, HostIPv6Addr, to_wapi_list

logger = structlog.get_logger(__name__)

RecordType = Literal[
    "record:a",
    "record:aaaa",
    "record:cname",
    "record:host",
    "record:ptr",
    "record:mx",
    "record:txt",
    "record:srv",
]

DEFAULT_RETURN_FIELDS: Dict[str, str] = {
    "record:a": "name,ipv4addr,view,ttl,comment,zone,disable",
    "record:aaaa": "name,ipv6addr,view,ttl,comment,zone,disable",
    "record:cname": "name,canonical,view,ttl,comment,zone,disable",
    "record:host": "name,ipv4addrs,ipv6addrs,view,ttl,comment,zone,aliases,configure_for_dns,disable",
    "record:ptr": "ptrdname,ipv4addr,ipv6addr,view,ttl,comment,zone,disable",
    "record:mx": "name,mail_exchanger,preference,view,ttl,comment,zone,disable",
    "record:txt": "name,text,view,ttl,comment,zone,disable",
    "record:srv": "name,target,port,priority,weight,view,ttl,comment,zone,disable",
}

ALL_RECORDS_RETURN_FIELDS = "name,type,address,comment,zone,view"


def _common_fields(data: dict, view: Optional[str], ttl: Optional[int], comment: Optional[str]) -> dict:
    if view:
        data["view"] = view
    set_ttl(data, ttl)
    if comment:
        data["comment"] = comment
    return data


def register_dns_tools(mcp: FastMCP, client: InfobloxClient) -> None:
    """Register DNS record tools on the server."""

    def _create(record_type: str, kind: str, data: dict) -> str:
        try:
            ref = client.create(record_type, data)
        except Exception as e:
            raise ToolError(f"Error creating {kind} record: {e}") from e
        logger.info("dns_record_created", record_type=record_type, ref=ref)
        return created(f"{kind} record", ref)

    # ==================== Search ====================

    @mcp.tool()
    def search_dns_records(
        record_type: RecordType,
        name: Optional[str] = None,
        zone: Optional[str] = None,
        view: Optional[str] = None,
        ip_address: Optional[str] = None,
        max_results: int = 100,
        return_fields: Optional[str] = None,
    ) -> str:
        """
        Search for DNS records in Infoblox. Supports A, AAAA, CNAME, Host, PTR, MX, TXT, SRV records.
        Name search uses regex by default.

        Args:
            record_type: Type of DNS record to search for (e.g., "record:a", "record:host")
            name: Record name (FQDN), regex search - 'host' matches 'host.example.com'
            zone: DNS zone to filter by
            view: DNS view to filter by
            ip_address: IP address to search for (A/AAAA/Host records)
            max_results: Maximum number of results to return (default: 100)
            return_fields: Comma-separated list of fields to return instead of the defaults

        Examples:
            - search_dns_records(record_type="record:a", name="web")
            - search_dns_records(record_type="record:host", ip_address="10.0.0.15")
        """
        params: Dict[str, Any] = {
            "_max_results": max_results,
            "_return_fields": return_fields or DEFAULT_RETURN_FIELDS.get(record_type, ""),
        }
        if name:
            params["name~"] = name
        if zone:
            params["zone"] = zone
        if view:
            params["view"] = view
        if ip_address:
            if record_type in ("record:a", "record:host"):
                params["ipv4addr"] = ip_address
            elif record_type == "record:aaaa":
                params["ipv6addr"] = ip_address

        try:
            return format_results(client.get(record_type, params))
        except Exception as e:
            raise ToolError(f"Error searching records: {e}") from e

    @mcp.tool()
    def get_all_records_in_zone(
        zone: str,
        view: Optional[str] = None,
        record_type: Optional[str] = None,
        max_results: int = 500,
    ) -> str:
        """
        List all DNS records in a specific zone. Returns all record types in the zone.

        Args:
            zone: DNS zone name (FQDN)
            view: DNS view
            record_type: Filter by record type: A, AAAA, CNAME, MX, PTR, SRV, TXT, HOST, etc.
            max_results: Maximum number of results (default: 500)
        """
        params: Dict[str, Any] = {
            "zone": zone,
            "_max_results": max_results,
            "_return_fields": ALL_RECORDS_RETURN_FIELDS,
        }
        if view:
            params["view"] = view
        if record_type:
            params["type"] = record_type

        try:
            return format_results(client.get("allrecords", params))
        except Exception as e:
            raise ToolError(f"Error fetching zone records: {e}") from e

    # ==================== Create ====================

    @mcp.tool()
    def create_a_record(
        name: str,
        ipv4addr: str,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
        disable: bool = False,
    ) -> str:
        """
        Create a DNS A record in Infoblox

        Args:
            name: FQDN for the A record (e.g., host.example.com)
            ipv4addr: IPv4 address for the record
            view: DNS view (defaults to 'default')
            ttl: TTL in seconds
            comment: Comment for the record
            disable: Create in disabled state
        """
        data = _common_fields({"name": name, "ipv4addr": ipv4addr}, view, ttl, comment)
        if disable:
            data["disable"] = True
        return _create("record:a", "A", data)

    @mcp.tool()
    def create_aaaa_record(
        name: str,
        ipv6addr: str,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """
        Create a DNS AAAA (IPv6) record in Infoblox

        Args:
            name: FQDN for the AAAA record
            ipv6addr: IPv6 address for the record
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
        """
        return _create("record:aaaa", "AAAA", _common_fields({"name": name, "ipv6addr": ipv6addr}, view, ttl, comment))

    @mcp.tool()
    def create_cname_record(
        name: str,
        canonical: str,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """
        Create a DNS CNAME record in Infoblox

        Args:
            name: Alias FQDN for the CNAME record
            canonical: Canonical name (target FQDN)
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
        """
        return _create(
            "record:cname", "CNAME", _common_fields({"name": name, "canonical": canonical}, view, ttl, comment)
        )

    @mcp.tool()
    def create_host_record(
        name: str,
        ipv4addrs: Optional[List[HostIPv4Addr]] = None,
        ipv6addrs: Optional[List[HostIPv6Addr]] = None,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
        configure_for_dns: bool = True,
    ) -> str:
        """
        Create a DNS Host record in Infoblox. Host records combine A and PTR records.
        Use 'func:nextavailableip:<network>' as ipv4addr to auto-assign the next available IP.

        Args:
            name: FQDN for the host record
            ipv4addrs: IPv4 addresses for the host, each {"ipv4addr", "mac"?, "configure_for_dhcp"?}
            ipv6addrs: IPv6 addresses for the host, each {"ipv6addr"}
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
            configure_for_dns: Configure for DNS (default: True)

        Examples:
            - create_host_record(name="web-01.example.com", ipv4addrs=[{"ipv4addr": "10.0.0.10"}])
            - create_host_record(name="db.example.com", ipv4addrs=[{"ipv4addr": "func:nextavailableip:10.0.0.0/24"}])
        """
        data: Dict[str, Any] = {"name": name}
        if ipv4addrs:
            data["ipv4addrs"] = to_wapi_list(ipv4addrs)
        if ipv6addrs:
            data["ipv6addrs"] = to_wapi_list(ipv6addrs)
        _common_fields(data, view, ttl, comment)
        data["configure_for_dns"] = configure_for_dns
        return _create("record:host", "Host", data)

    @mcp.tool()
    def create_ptr_record(
        ptrdname: str,
        ipv4addr: Optional[str] = None,
        ipv6addr: Optional[str] = None,
        name: Optional[str] = None,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """
        Create a DNS PTR (reverse) record in Infoblox

        Args:
            ptrdname: Domain name the PTR points to (FQDN)
            ipv4addr: IPv4 address for the PTR record
            ipv6addr: IPv6 address for the PTR record
            name: PTR record name in reverse DNS format (e.g., 1.0.168.192.in-addr.arpa)
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
        """
        data: Dict[str, Any] = {"ptrdname": ptrdname}
        if ipv4addr:
            data["ipv4addr"] = ipv4addr
        if ipv6addr:
            data["ipv6addr"] = ipv6addr
        if name:
            data["name"] = name
        return _create("record:ptr", "PTR", _common_fields(data, view, ttl, comment))

    @mcp.tool()
    def create_mx_record(
        name: str,
        mail_exchanger: str,
        preference: int,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """
        Create a DNS MX (mail exchange) record in Infoblox

        Args:
            name: FQDN for the MX record (usually the domain)
            mail_exchanger: FQDN of the mail server
            preference: MX preference/priority value
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
        """
        data = {"name": name, "mail_exchanger": mail_exchanger, "preference": preference}
        return _create("record:mx", "MX", _common_fields(data, view, ttl, comment))

    @mcp.tool()
    def create_txt_record(
        name: str,
        text: str,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """Create a DNS TXT record in Infoblox"""
        return _create("record:txt", "TXT", _common_fields({"name": name, "text": text}, view, ttl, comment))

    @mcp.tool()
    def create_srv_record(
        name: str,
        target: str,
        port: int,
        priority: int,
        weight: int,
        view: Optional[str] = None,
        ttl: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> str:
        """
        Create a DNS SRV record in Infoblox

        Args:
            name: SRV record name in format _service._proto.name (e.g., _sip._tcp.example.com)
            target: Target host FQDN
            port: Port number
            priority: Priority value (lower = higher priority)
            weight: Weight for load balancing
            view: DNS view
            ttl: TTL in seconds
            comment: Comment for the record
        """
        data = {"name": name, "target": target, "port": port, "priority": priority, "weight": weight}
        return _create("record:srv", "SRV", _common_fields(data, view, ttl, comment))

    # ==================== Update / Delete ====================

    @mcp.tool()
    def update_dns_record(ref: str, fields: Dict[str, Any]) -> str:
        """
        Update an existing DNS record by its object reference. Get the reference from a search first.

        Args:
            ref: Object reference of the record to update (e.g., record:a/ZG5z...)
            fields: Fields to update as key-value pairs (e.g., {"ipv4addr": "10.0.0.1", "comment": "updated"})
        """
        check(validate_ref(ref), "updating record")
        try:
            result = client.update(ref, fields)
        except Exception as e:
            raise ToolError(f"Error updating record: {e}") from e
        return updated("Record", result)

    @mcp.tool()
    def delete_dns_record(ref: str) -> str:
        """
        Delete a DNS record by its object reference. Get the reference from a search first.

        Args:
            ref: Object reference of the record to delete (e.g., record:a/ZG5z...)
        """
        check(validate_ref(ref), "deleting record")
        try:
            result = client.delete(ref)
        except Exception as e:
            raise ToolError(f"Error deleting record: {e}") from e
        logger.info("dns_record_deleted", ref=result)
        return deleted("Record", result)
