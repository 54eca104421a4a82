"""
Pydantic schemas for DNS resolution bindings.
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

NAME_PATTERN = r"^([a-z]|[a-z][-a-z0-9]*[a-z0-9])$"


# ── Request models ────────────────────────────────────────────────────────────

class CreateBindingRequest(BaseModel):
    """Request body for POST /vpcs/{vpc_id}/dns-resolution-bindings."""

    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=63,
        pattern=NAME_PATTERN,
        examples=["hub-binding"],
        description="Name for the binding (auto-generated if omitted).",
    )
    vpc_id: Optional[str] = Field(None, description="Identifier of the hub VPC.")
    vpc_crn: Optional[str] = Field(None, description="CRN of the hub VPC.")
    vpc_href: Optional[str] = Field(None, description="URL of the hub VPC.")

    @model_validator(mode="after")
    def require_vpc_identity(self) -> "CreateBindingRequest":
        if not (self.vpc_id or self.vpc_crn or self.vpc_href):
            raise ValueError("One of vpc_id, vpc_crn or vpc_href must be given.")
        return self

    def vpc_identity(self) -> dict:
        """Identity of the hub VPC, preferring id over CRN over href."""
        if self.vpc_id:
            return {"id": self.vpc_id}
        if self.vpc_crn:
            return {"crn": self.vpc_crn}
        return {"href": self.vpc_href}


class UpdateBindingRequest(BaseModel):
    """Request body for PATCH /vpcs/{vpc_id}/dns-resolution-bindings/{id}."""

    name: str = Field(..., min_length=1, max_length=63, pattern=NAME_PATTERN)


# ── Response models ───────────────────────────────────────────────────────────

class BoundVPCReference(BaseModel):
    crn: Optional[str] = None
    href: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    resource_type: Optional[str] = None


class EndpointGatewayReference(BaseModel):
    crn: Optional[str] = None
    href: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    resource_type: Optional[str] = None


class DnsResolutionBinding(BaseModel):
    """A binding as returned by the service, plus its owning ``vpc_id``."""

    id: str
    vpc_id: str
    name: Optional[str] = None
    created_at: Optional[str] = None
    health_state: Optional[str] = None
    href: Optional[str] = None
    lifecycle_state: Optional[str] = None
    resource_type: Optional[str] = None
    vpc: Optional[BoundVPCReference] = None
    endpoint_gateways: list[EndpointGatewayReference] = Field(default_factory=list)


class BindingListResponse(BaseModel):
    """Returned by GET /vpcs/{vpc_id}/dns-resolution-bindings."""

    vpc_id: str
    count: int
    dns_resolution_bindings: list[DnsResolutionBinding]
