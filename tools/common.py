"""Shared helpers for the WAPI tool groups: result formatting and input checks."""

import ipaddress
import json
import re
from typing import Any

from fastmcp.exceptions import ToolError

# Values starting with this prefix are evaluated by the grid (e.g. func:nextavailableip:10.0.0.0/24)
WAPI_FUNCTION_PREFIX = "func:"


# ==================== Result Helpers ====================


def format_results(results: Any) -> str:
    """Pretty-print a WAPI response for the agent"""
    return json.dumps(results, indent=2)


def created(kind: str, ref: Any) -> str:
    return f"{kind} created successfully.\nReference: {ref}"


def updated(kind: str, ref: Any) -> str:
    return f"{kind} updated successfully.\nReference: {ref}"


def deleted(kind: str, ref: Any) -> str:
    return f"{kind} deleted successfully.\nReference: {ref}"


def set_ttl(data: dict, ttl: int | None) -> None:
    """WAPI ignores ttl unless use_ttl is set alongside it."""
    if ttl is not None:
        data["ttl"] = ttl
        data["use_ttl"] = True


def check(valid_and_error: tuple, action: str) -> None:
    """Raise a ToolError when a validator rejected its input."""
    valid, err = valid_and_error
    if not valid:
        raise ToolError(f"Error {action}: {err}")


# ==================== Validation Helpers ====================


def is_wapi_function(value: str) -> bool:
    return value.startswith(WAPI_FUNCTION_PREFIX)


def validate_ref(ref: str) -> tuple:
    """Validate a WAPI object reference (objtype/id...). Returns (is_valid, error_msg)."""
    if re.match(r"^[A-Za-z0-9_:]+/.+$", ref):
        return True, ""
    return False, f"Invalid object reference '{ref}'. Expected format: <objtype>/<id>, e.g. record:a/ZG5z..."


def validate_cidr(cidr: str) -> tuple:
    """Validate CIDR notation. Returns (is_valid, error_msg)."""
    if is_wapi_function(cidr):
        return True, ""
    if "/" not in cidr:
        return False, f"Invalid CIDR '{cidr}': missing prefix length"
    try:
        ipaddress.ip_network(cidr, strict=False)
        return True, ""
    except ValueError as e:
        return False, f"Invalid CIDR '{cidr}': {e}"


def validate_ip(ip: str) -> tuple:
    """Validate IP address. Returns (is_valid, error_msg)."""
    if is_wapi_function(ip):
        return True, ""
    try:
        ipaddress.ip_address(ip)
        return True, ""
    except ValueError as e:
        return False, f"Invalid IP address '{ip}': {e}"


def validate_ipv4(ip: str) -> tuple:
    """Validate IPv4 address. Returns (is_valid, error_msg)."""
    if is_wapi_function(ip):
        return True, ""
    try:
        ipaddress.IPv4Address(ip)
        return True, ""
    except ValueError as e:
        return False, f"Invalid IPv4 address '{ip}': {e}"


def validate_mac(mac: str) -> tuple:
    """Validate MAC address. Returns (is_valid, error_msg)."""
    pattern = r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$"
    if re.match(pattern, mac):
        return True, ""
    return False, f"Invalid MAC address '{mac}'. Expected format: AA:BB:CC:DD:EE:FF"
