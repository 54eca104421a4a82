"""
Pydantic schemas for the routing-table routes data source.

The service returns ``next_hop`` and ``creator`` as polymorphic objects.
They are modelled here as closed tagged unions: each variant carries a
literal ``kind`` discriminant and pydantic dispatches on it.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class ReferenceDeleted(BaseModel):
    """Present when the referenced resource has been deleted."""

    more_info: str


# ── next_hop variants ─────────────────────────────────────────────────────────

class RouteNextHopIP(BaseModel):
    kind: Literal["ip"] = "ip"
    address: str


class RouteNextHopVPNGatewayConnection(BaseModel):
    kind: Literal["vpn_gateway_connection"] = "vpn_gateway_connection"
    id: str
    href: Optional[str] = None
    name: Optional[str] = None
    resource_type: Optional[str] = None
    deleted: Optional[ReferenceDeleted] = None


RouteNextHop = Annotated[
    Union[RouteNextHopIP, RouteNextHopVPNGatewayConnection],
    Field(discriminator="kind"),
]


# ── creator variants ──────────────────────────────────────────────────────────

class _CreatorReference(BaseModel):
    crn: Optional[str] = None
    href: Optional[str] = None
    id: str
    name: Optional[str] = None
    resource_type: Optional[str] = None
    deleted: Optional[ReferenceDeleted] = None


class RouteCreatorVPNGateway(_CreatorReference):
    kind: Literal["vpn_gateway"] = "vpn_gateway"


class RouteCreatorVPNServer(_CreatorReference):
    kind: Literal["vpn_server"] = "vpn_server"


RouteCreator = Annotated[
    Union[RouteCreatorVPNGateway, RouteCreatorVPNServer],
    Field(discriminator="kind"),
]


# ── Response models ───────────────────────────────────────────────────────────

class Route(BaseModel):
    id: str
    href: Optional[str] = None
    name: Optional[str] = None
    created_at: Optional[str] = None
    action: Optional[str] = None
    destination: Optional[str] = None
    lifecycle_state: Optional[str] = None
    origin: Optional[str] = None
    zone: Optional[str] = None
    # Flat form of next_hop_details: the address, or the connection id
    nexthop: Optional[str] = None
    next_hop_details: Optional[RouteNextHop] = None
    creator: Optional[RouteCreator] = None


class RouteListResponse(BaseModel):
    """
    Returned by GET /vpcs/{vpc_id}/routing-tables/{routing_table_id}/routes.

    Each route is the attribute map of a ``Route``: unset fields are left
    out and the union fields carry their ``kind``.
    """

    vpc_id: str
    routing_table_id: str
    count: int
    routes: list[dict[str, Any]]
