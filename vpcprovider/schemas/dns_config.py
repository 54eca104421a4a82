"""
Pydantic schemas for the VPC DNS configuration resource.

Field names form the public contract of the resource and match the attribute
names persisted in the state store.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

RESOURCE_ID_PATTERN = r"^[-0-9a-z_]+$"

ResolverType = Literal["system", "manual", "delegated"]


# ── Request models ────────────────────────────────────────────────────────────

class ManualServer(BaseModel):
    """A DNS server used when the resolver type is ``manual``."""

    address: str = Field(
        ...,
        examples=["192.168.3.4"],
        description="The IP address of the DNS server.",
    )
    zone_affinity: Optional[str] = Field(
        None,
        examples=["us-south-1"],
        description="The zone affinity for this DNS server.",
    )


class DnsConfigSettings(BaseModel):
    """The mutable part of a VPC DNS configuration (PUT body)."""

    enable_hub: bool = Field(
        False,
        description="Indicates whether this VPC is enabled as a DNS name resolution hub.",
    )
    resolver_type: ResolverType = Field(
        "system",
        description="The type of DNS resolver (system, manual, delegated).",
    )
    resolver_vpc_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=64,
        pattern=RESOURCE_ID_PATTERN,
        description="The VPC ID to delegate DNS resolution to (delegated only).",
    )
    resolver_vpc_crn: Optional[str] = Field(
        None,
        description="The VPC CRN to delegate DNS resolution to (alternative to resolver_vpc_id).",
    )
    dns_binding_name: Optional[str] = Field(
        None,
        description="Name for the DNS resolution binding (auto-generated if not specified).",
    )
    manual_servers: list[ManualServer] = Field(
        default_factory=list,
        description="Manual DNS servers (required when resolver_type is manual).",
    )


class CreateDnsConfigRequest(DnsConfigSettings):
    """Request body for POST /dns-configs."""

    vpc_id: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=RESOURCE_ID_PATTERN,
        examples=["r006-4727d842-f94f-4a2d-824a-9bc9b02c523b"],
        description="The VPC identifier.  Cannot be changed after creation.",
    )


# ── Response models ───────────────────────────────────────────────────────────

class DnsConfigState(BaseModel):
    """Realized DNS configuration of a VPC as read back from the service."""

    id: str
    vpc_id: str
    enable_hub: bool = False
    resolver_type: ResolverType = "system"
    resolver_vpc_id: Optional[str] = None
    resolver_vpc_crn: Optional[str] = None
    dns_binding_name: Optional[str] = None
    manual_servers: list[ManualServer] = Field(default_factory=list)
    resolution_binding_count: int = 0
    dns_resolution_binding_id: Optional[str] = None


class DnsConfigListResponse(BaseModel):
    """Returned by GET /dns-configs."""

    count: int
    dns_configs: list[DnsConfigState]
