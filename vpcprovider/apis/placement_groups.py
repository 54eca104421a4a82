"""
Placement group router — the ``placement_group`` resource and data sources.

Endpoints
─────────
  POST   /placement-groups                               Create a placement group
  GET    /placement-groups                               List all placement groups
  GET    /placement-groups/{placement_group_id}          Read a managed one
  GET    /placement-groups/{placement_group_id}/lookup   Look up any one
  PATCH  /placement-groups/{placement_group_id}          Rename one
  DELETE /placement-groups/{placement_group_id}          Delete one
"""

import logging

from fastapi import APIRouter, Depends, status

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.dependencies.api import get_current_client
from vpcprovider.dependencies.cloud import get_vpc_client
from vpcprovider.dependencies.dao import get_state_repository
from vpcprovider.schemas.placement_group import (
    CreatePlacementGroupRequest,
    PlacementGroup,
    PlacementGroupListResponse,
    UpdatePlacementGroupRequest,
)
from vpcprovider.services.placement_group import (
    create_placement_group,
    delete_placement_group,
    fetch_placement_group,
    list_placement_groups,
    read_placement_group,
    update_placement_group,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/placement-groups", tags=["Placement Groups"])


@router.post(
    "",
    response_model=PlacementGroup,
    status_code=status.HTTP_201_CREATED,
    summary="Create a placement group",
)
def create(
    body: CreatePlacementGroupRequest,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> PlacementGroup:
    logger.info("POST /placement-groups called by '%s'", current_client)
    return create_placement_group(body, client=client, repo=repo)


@router.get("", response_model=PlacementGroupListResponse, summary="List placement groups")
def list_all(
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
) -> PlacementGroupListResponse:
    groups = list_placement_groups(client=client)
    return PlacementGroupListResponse(count=len(groups), placement_groups=groups)


@router.get(
    "/{placement_group_id}", response_model=PlacementGroup, summary="Read a managed placement group"
)
def get(
    placement_group_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> PlacementGroup:
    return read_placement_group(placement_group_id, client=client, repo=repo)


@router.get(
    "/{placement_group_id}/lookup",
    response_model=PlacementGroup,
    summary="Look up any placement group without managing it",
)
def lookup(
    placement_group_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
) -> PlacementGroup:
    return fetch_placement_group(placement_group_id, client=client)


@router.patch(
    "/{placement_group_id}", response_model=PlacementGroup, summary="Rename a placement group"
)
def update(
    placement_group_id: str,
    body: UpdatePlacementGroupRequest,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> PlacementGroup:
    return update_placement_group(placement_group_id, body, client=client, repo=repo)


@router.delete(
    "/{placement_group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a placement group",
)
def delete(
    placement_group_id: str,
    current_client: str = Depends(get_current_client),
    client: VPCClient = Depends(get_vpc_client),
    repo: StateRepository = Depends(get_state_repository),
) -> None:
    logger.info("DELETE /placement-groups/%s called by '%s'", placement_group_id, current_client)
    delete_placement_group(placement_group_id, client=client, repo=repo)
