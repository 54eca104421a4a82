"""
DNS configuration router — the ``dns_config`` resource.

Endpoints
─────────
  POST   /dns-configs                   Apply a DNS configuration to a VPC
  GET    /dns-configs                   List managed DNS configurations
  GET    /dns-configs/{vpc_id}          Refresh and return one configuration
  PUT    /dns-configs/{vpc_id}          Change the configuration
  POST   /dns-configs/{vpc_id}/import   Adopt an existing VPC's configuration
  DELETE /dns-configs/{vpc_id}          Reset the VPC to the system resolver
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.dependencies.api import get_current_client
from vpcprovider.dependencies.cloud import get_vpc_client
from vpcprovider.dependencies.dao import get_state_repository
from vpcprovider.schemas.dns_config import (
    RESOURCE_ID_PATTERN,
    CreateDnsConfigRequest,
    DnsConfigListResponse,
    DnsConfigSettings,
    DnsConfigState,
)
from vpcprovider.services.dns_config import (
    create_dns_config,
    delete_dns_config,
    import_dns_config,
    list_dns_configs,
    read_dns_config,
    update_dns_config,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dns-configs", tags=["VPC DNS Configuration"])

VpcId = Annotated[str, Path(min_length=1, max_length=64, pattern=RESOURCE_ID_PATTERN)]


@router.post(
    "",
    response_model=DnsConfigState,
    status_code=status.HTTP_201_CREATED,
    summary="Apply a DNS resolver configuration to a VPC",
    description=(
        "Validates the configuration, creates a DNS resolution binding when the "
        "resolver type is `delegated`, then patches the VPC's DNS block.  A binding "
        "created by this call is deleted again if the patch fails."
    ),
)
def create_config(
    body: CreateDnsConfigRequest,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsConfigState:
    logger.info("POST /dns-configs (%s) called by '%s'", body.vpc_id, current_client)
    return create_dns_config(body, client=client, repo=repo)


@router.get(
    "",
    response_model=DnsConfigListResponse,
    summary="List managed DNS configurations",
)
def list_configs(
    current_client: str = Depends(get_current_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsConfigListResponse:
    configs = list_dns_configs(repo)
    return DnsConfigListResponse(count=len(configs), dns_configs=configs)


@router.get(
    "/{vpc_id}",
    response_model=DnsConfigState,
    summary="Read a managed DNS configuration",
)
def get_config(
    vpc_id: VpcId,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsConfigState:
    return read_dns_config(vpc_id, client=client, repo=repo)


@router.put(
    "/{vpc_id}",
    response_model=DnsConfigState,
    summary="Change a managed DNS configuration",
)
def update_config(
    body: DnsConfigSettings,
    vpc_id: VpcId,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsConfigState:
    logger.info("PUT /dns-configs/%s called by '%s'", vpc_id, current_client)
    return update_dns_config(vpc_id, body, client=client, repo=repo)


@router.post(
    "/{vpc_id}/import",
    response_model=DnsConfigState,
    summary="Adopt the existing DNS configuration of a VPC",
)
def import_config(
    vpc_id: VpcId,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> DnsConfigState:
    logger.info("POST /dns-configs/%s/import called by '%s'", vpc_id, current_client)
    return import_dns_config(vpc_id, client=client, repo=repo)


@router.delete(
    "/{vpc_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset a VPC to the system DNS resolver",
)
def delete_config(
    vpc_id: VpcId,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> None:
    logger.info("DELETE /dns-configs/%s called by '%s'", vpc_id, current_client)
    if not delete_dns_config(vpc_id, client=client, repo=repo):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No DNS configuration managed for VPC '{vpc_id}'.",
        )
