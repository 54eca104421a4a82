import pytest

from vpcprovider.exceptions import UnknownVariantError
from vpcprovider.schemas.route import (
    ReferenceDeleted,
    RouteCreatorVPNGateway,
    RouteCreatorVPNServer,
    RouteNextHopIP,
    RouteNextHopVPNGatewayConnection,
)
from vpcprovider.services.routes import (
    creator_from_api,
    creator_to_map,
    list_routes,
    next_hop_from_api,
    next_hop_to_map,
    route_from_api,
    route_to_map,
)

CONNECTION = {
    "id": "conn-1",
    "href": "https://vpc.example/v1/vpn_gateways/gw/connections/conn-1",
    "name": "to-onprem",
    "resource_type": "vpn_gateway_connection",
    "deleted": {"more_info": "https://cloud.ibm.com/apidocs/vpc#deleted-resources"},
}


def test_next_hop_ip_variant():
    next_hop = next_hop_from_api({"address": "10.0.0.4"})

    assert isinstance(next_hop, RouteNextHopIP)
    assert next_hop.kind == "ip"
    assert next_hop_to_map(next_hop) == {"address": "10.0.0.4"}


def test_next_hop_vpn_connection_to_map_is_field_exact():
    next_hop = RouteNextHopVPNGatewayConnection(
        id="conn-1",
        href=CONNECTION["href"],
        name="to-onprem",
        resource_type="vpn_gateway_connection",
        deleted=ReferenceDeleted(more_info=CONNECTION["deleted"]["more_info"]),
    )

    assert next_hop_to_map(next_hop) == CONNECTION
    assert next_hop_from_api(CONNECTION) == next_hop


def test_next_hop_unknown_shape_is_rejected():
    with pytest.raises(UnknownVariantError):
        next_hop_from_api({"resource_type": "mystery"})


def test_creator_variants_dispatch_on_resource_type():
    gateway = creator_from_api({"id": "gw-1", "resource_type": "vpn_gateway", "name": "gw"})
    server = creator_from_api({"id": "srv-1", "resource_type": "vpn_server"})

    assert isinstance(gateway, RouteCreatorVPNGateway)
    assert isinstance(server, RouteCreatorVPNServer)
    assert server.kind == "vpn_server"


def test_creator_to_map_is_field_exact():
    creator = RouteCreatorVPNServer(
        crn="crn:v1:bluemix:public:is:us-south:a/acc::vpn-server:srv-1",
        href="https://vpc.example/v1/vpn_servers/srv-1",
        id="srv-1",
        name="remote-access",
        resource_type="vpn_server",
        deleted=ReferenceDeleted(more_info="https://cloud.ibm.com/docs"),
    )

    assert creator_to_map(creator) == {
        "crn": "crn:v1:bluemix:public:is:us-south:a/acc::vpn-server:srv-1",
        "href": "https://vpc.example/v1/vpn_servers/srv-1",
        "id": "srv-1",
        "name": "remote-access",
        "resource_type": "vpn_server",
        "deleted": {"more_info": "https://cloud.ibm.com/docs"},
    }


def test_creator_unknown_resource_type_is_rejected():
    with pytest.raises(UnknownVariantError):
        creator_from_api({"id": "x", "resource_type": "load_balancer"})


def test_route_flattens_nexthop():
    ip_route = route_from_api(
        {
            "id": "r1",
            "action": "deliver",
            "destination": "192.168.0.0/24",
            "next_hop": {"address": "10.0.0.4"},
            "zone": {"name": "us-south-1"},
            "origin": "user",
        }
    )
    vpn_route = route_from_api({"id": "r2", "next_hop": CONNECTION})

    assert ip_route.nexthop == "10.0.0.4"
    assert ip_route.zone == "us-south-1"
    assert ip_route.creator is None
    assert vpn_route.nexthop == "conn-1"
    assert vpn_route.next_hop_details.kind == "vpn_gateway_connection"


def test_route_to_map_is_field_exact():
    route = route_from_api(
        {
            "id": "r2",
            "destination": "172.16.0.0/16",
            "zone": {"name": "us-south-2"},
            "next_hop": CONNECTION,
            "creator": {"id": "gw-1", "resource_type": "vpn_gateway", "name": "gw"},
        }
    )

    assert route_to_map(route) == {
        "id": "r2",
        "destination": "172.16.0.0/16",
        "zone": "us-south-2",
        "nexthop": "conn-1",
        "next_hop_details": {"kind": "vpn_gateway_connection", **CONNECTION},
        "creator": {
            "kind": "vpn_gateway",
            "id": "gw-1",
            "name": "gw",
            "resource_type": "vpn_gateway",
        },
    }


def test_list_routes_maps_every_route(vpc_client):
    vpc_client.routes[("v1", "rt1")] = [
        {"id": "r1", "next_hop": {"address": "10.0.0.4"}},
        {
            "id": "r2",
            "next_hop": CONNECTION,
            "creator": {"id": "gw-1", "resource_type": "vpn_gateway"},
        },
    ]

    routes = list_routes("v1", "rt1", vpc_client)

    assert [r.id for r in routes] == ["r1", "r2"]
    assert isinstance(routes[1].creator, RouteCreatorVPNGateway)
