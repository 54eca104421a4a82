"""
Routing table routes router — read-only data source.
"""

from fastapi import APIRouter, Depends

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dependencies.api import get_current_client
from vpcprovider.dependencies.cloud import get_vpc_client
from vpcprovider.schemas.route import RouteListResponse
from vpcprovider.services.routes import list_routes, route_to_map

router = APIRouter(prefix="/vpcs/{vpc_id}/routing-tables", tags=["Routing Tables"])


@router.get(
    "/{routing_table_id}/routes",
    response_model=RouteListResponse,
    summary="List the routes of a VPC routing table",
)
def get_routes(
    vpc_id: str,
    routing_table_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
) -> RouteListResponse:
    routes = list_routes(vpc_id, routing_table_id, client=client)
    return RouteListResponse(
        vpc_id=vpc_id,
        routing_table_id=routing_table_id,
        count=len(routes),
        routes=[route_to_map(route) for route in routes],
    )
