"""
Routing table routes data source.

``next_hop`` and ``creator`` arrive as untyped dicts whose shape depends on
the variant.  ``*_from_api`` picks the variant, ``*_to_map`` flattens a
variant back into the attribute map that ``route_to_map`` returns to callers
of the data source.
"""

import logging
from typing import Optional, Union

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.exceptions import UnknownVariantError
from vpcprovider.schemas.route import (
    ReferenceDeleted,
    Route,
    RouteCreatorVPNGateway,
    RouteCreatorVPNServer,
    RouteNextHopIP,
    RouteNextHopVPNGatewayConnection,
)

logger = logging.getLogger(__name__)

NextHop = Union[RouteNextHopIP, RouteNextHopVPNGatewayConnection]
Creator = Union[RouteCreatorVPNGateway, RouteCreatorVPNServer]


def _deleted(data: dict) -> Optional[ReferenceDeleted]:
    deleted = data.get("deleted")
    if not deleted:
        return None
    return ReferenceDeleted(more_info=deleted["more_info"])


def _deleted_to_map(deleted: Optional[ReferenceDeleted]) -> dict:
    if deleted is None:
        return {}
    return {"deleted": {"more_info": deleted.more_info}}


def _present(**fields) -> dict:
    return {key: value for key, value in fields.items() if value is not None}


# ── next_hop ──────────────────────────────────────────────────────────────────

def next_hop_from_api(data: dict) -> NextHop:
    if data.get("address") is not None:
        return RouteNextHopIP(address=data["address"])
    if data.get("id") is not None:
        return RouteNextHopVPNGatewayConnection(
            id=data["id"],
            href=data.get("href"),
            name=data.get("name"),
            resource_type=data.get("resource_type"),
            deleted=_deleted(data),
        )
    raise UnknownVariantError(f"Unrecognized route next_hop: {data!r}")


def next_hop_to_map(next_hop: NextHop) -> dict:
    if isinstance(next_hop, RouteNextHopIP):
        return {"address": next_hop.address}
    if isinstance(next_hop, RouteNextHopVPNGatewayConnection):
        return {
            **_present(
                href=next_hop.href,
                id=next_hop.id,
                name=next_hop.name,
                resource_type=next_hop.resource_type,
            ),
            **_deleted_to_map(next_hop.deleted),
        }
    raise UnknownVariantError(f"Unrecognized next_hop variant: {type(next_hop).__name__}")


# ── creator ───────────────────────────────────────────────────────────────────

_CREATOR_VARIANTS = {
    "vpn_gateway": RouteCreatorVPNGateway,
    "vpn_server": RouteCreatorVPNServer,
}


def creator_from_api(data: dict) -> Creator:
    variant = _CREATOR_VARIANTS.get(data.get("resource_type"))
    if variant is None:
        raise UnknownVariantError(f"Unrecognized route creator: {data!r}")
    return variant(
        crn=data.get("crn"),
        href=data.get("href"),
        id=data["id"],
        name=data.get("name"),
        resource_type=data.get("resource_type"),
        deleted=_deleted(data),
    )


def creator_to_map(creator: Creator) -> dict:
    if not isinstance(creator, (RouteCreatorVPNGateway, RouteCreatorVPNServer)):
        raise UnknownVariantError(f"Unrecognized creator variant: {type(creator).__name__}")
    return {
        **_present(
            crn=creator.crn,
            href=creator.href,
            id=creator.id,
            name=creator.name,
            resource_type=creator.resource_type,
        ),
        **_deleted_to_map(creator.deleted),
    }


# ── Route ─────────────────────────────────────────────────────────────────────

def route_from_api(data: dict) -> Route:
    next_hop = next_hop_from_api(data["next_hop"]) if data.get("next_hop") else None
    creator = creator_from_api(data["creator"]) if data.get("creator") else None

    nexthop: Optional[str] = None
    if isinstance(next_hop, RouteNextHopIP):
        nexthop = next_hop.address
    elif isinstance(next_hop, RouteNextHopVPNGatewayConnection):
        nexthop = next_hop.id

    return Route(
        id=data["id"],
        href=data.get("href"),
        name=data.get("name"),
        created_at=data.get("created_at"),
        action=data.get("action"),
        destination=data.get("destination"),
        lifecycle_state=data.get("lifecycle_state"),
        origin=data.get("origin"),
        zone=(data.get("zone") or {}).get("name"),
        nexthop=nexthop,
        next_hop_details=next_hop,
        creator=creator,
    )


def route_to_map(route: Route) -> dict:
    """Attribute map returned by the data source; unions keep their ``kind``."""
    data = route.model_dump(exclude={"next_hop_details", "creator"}, exclude_none=True)
    if route.next_hop_details is not None:
        data["next_hop_details"] = {
            "kind": route.next_hop_details.kind,
            **next_hop_to_map(route.next_hop_details),
        }
    if route.creator is not None:
        data["creator"] = {"kind": route.creator.kind, **creator_to_map(route.creator)}
    return data


def list_routes(vpc_id: str, routing_table_id: str, client: VPCClient) -> list[Route]:
    """Every route of the routing table, across all pages."""
    routes = [route_from_api(r) for r in client.list_routing_table_routes(vpc_id, routing_table_id)]
    logger.info("Read %d route(s) of routing table %s.", len(routes), routing_table_id)
    return routes
