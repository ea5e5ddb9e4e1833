"""Nested WAPI structs accepted as tool arguments."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class WapiStruct(BaseModel):
    """WAPI structs carry their type in a `_struct` key."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wapi(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class DhcpMember(WapiStruct):
    struct: Literal["dhcpmember"] = Field("dhcpmember", alias="_struct")
    name: str = Field(description="Grid member FQDN")


class MemberServer(WapiStruct):
    struct: Literal["memberserver"] = Field("memberserver", alias="_struct")
    name: str = Field(description="Grid member FQDN")


class DhcpOption(WapiStruct):
    name: str = Field(description="Option name (e.g., routers)")
    num: int = Field(description="Option number")
    use_option: bool = True
    value: str = Field(description="Option value")
    vendor_class: str = "DHCP"


class HostIPv4Addr(WapiStruct):
    ipv4addr: str = Field(description="IPv4 address, or 'func:nextavailableip:<network>' for auto-assign")
    mac: Optional[str] = Field(None, description="MAC address for DHCP")
    configure_for_dhcp: Optional[bool] = Field(None, description="Enable DHCP for this address")


class HostIPv6Addr(WapiStruct):
    ipv6addr: str = Field(description="IPv6 address")


def to_wapi_list(items) -> list:
    return [item.to_wapi() for item in items]
