"""
DNS resolution binding router — the ``dns_resolution_binding`` resource and
its data sources, nested under the owning (spoke) VPC.

Endpoints
─────────
  POST   /vpcs/{vpc_id}/dns-resolution-bindings                       Create a binding
  GET    /vpcs/{vpc_id}/dns-resolution-bindings                       List all bindings
  GET    /vpcs/{vpc_id}/dns-resolution-bindings/{binding_id}          Read a managed binding
  GET    /vpcs/{vpc_id}/dns-resolution-bindings/{binding_id}/lookup   Look up any binding
  PATCH  /vpcs/{vpc_id}/dns-resolution-bindings/{binding_id}          Rename a binding
  DELETE /vpcs/{vpc_id}/dns-resolution-bindings/{binding_id}          Delete a binding
"""

import logging

from fastapi import APIRouter, Depends, status

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.dependencies.api import get_current_client
from vpcprovider.dependencies.cloud import get_vpc_client
from vpcprovider.dependencies.dao import get_state_repository
from vpcprovider.schemas.binding import (
    BindingListResponse,
    CreateBindingRequest,
    DnsResolutionBinding,
    UpdateBindingRequest,
)
from vpcprovider.services.binding import (
    create_binding,
    delete_binding,
    fetch_binding,
    list_bindings,
    read_binding,
    rename_binding,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/vpcs/{vpc_id}/dns-resolution-bindings",
    tags=["DNS Resolution Bindings"],
)


@router.post(
    "",
    response_model=DnsResolutionBinding,
    status_code=status.HTTP_201_CREATED,
    summary="Bind a VPC to a hub VPC for DNS resolution",
)
def create(
    vpc_id: str,
    body: CreateBindingRequest,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsResolutionBinding:
    logger.info("POST binding on VPC %s called by '%s'", vpc_id, current_client)
    return create_binding(vpc_id, body, client=client, repo=repo)


@router.get(
    "",
    response_model=BindingListResponse,
    summary="List the DNS resolution bindings of a VPC",
)
def list_all(
    vpc_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
) -> BindingListResponse:
    bindings = list_bindings(vpc_id, client=client)
    return BindingListResponse(vpc_id=vpc_id, count=len(bindings), dns_resolution_bindings=bindings)


@router.get(
    "/{binding_id}",
    response_model=DnsResolutionBinding,
    summary="Read a managed DNS resolution binding",
)
def get(
    vpc_id: str,
    binding_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsResolutionBinding:
    return read_binding(vpc_id, binding_id, client=client, repo=repo)


@router.get(
    "/{binding_id}/lookup",
    response_model=DnsResolutionBinding,
    summary="Look up any DNS resolution binding without managing it",
)
def lookup(
    vpc_id: str,
    binding_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
) -> DnsResolutionBinding:
    return fetch_binding(vpc_id, binding_id, client=client)


@router.patch(
    "/{binding_id}",
    response_model=DnsResolutionBinding,
    summary="Rename a DNS resolution binding",
)
def rename(
    vpc_id: str,
    binding_id: str,
    body: UpdateBindingRequest,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsResolutionBinding:
    return rename_binding(vpc_id, binding_id, body, client=client, repo=repo)


@router.delete(
    "/{binding_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a DNS resolution binding",
)
def delete(
    vpc_id: str,
    binding_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> None:
    logger.info("DELETE binding %s on VPC %s called by '%s'", binding_id, vpc_id, current_client)
    delete_binding(vpc_id, binding_id, client=client, repo=repo)
