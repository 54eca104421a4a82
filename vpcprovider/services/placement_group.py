"""
Placement group service.
"""

import logging

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.exceptions import RemoteCallError, ResourceGone
from vpcprovider.schemas.placement_group import (
    CreatePlacementGroupRequest,
    PlacementGroup,
    UpdatePlacementGroupRequest,
)
from vpcprovider.services.state import drop_state, load_state, save_state

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "placement_group"


def placement_group_from_api(data: dict) -> PlacementGroup:
    resource_group = data.get("resource_group") or {}
    return PlacementGroup(
        id=data["id"],
        strategy=data["strategy"],
        name=data.get("name"),
        resource_group=resource_group.get("id"),
        created_at=data.get("created_at"),
        crn=data.get("crn"),
        href=data.get("href"),
        lifecycle_state=data.get("lifecycle_state"),
        resource_type=data.get("resource_type"),
    )


def create_placement_group(
    request: CreatePlacementGroupRequest, client: VPCClient, repo: StateRepository
) -> PlacementGroup:
    result = client.create_placement_group(
        request.strategy, name=request.name, resource_group_id=request.resource_group
    )
    group = placement_group_from_api(result)
    save_state(repo, RESOURCE_TYPE, group.id, group)
    logger.info("Placement group %s created.", group.id)
    return group


def fetch_placement_group(placement_group_id: str, client: VPCClient) -> PlacementGroup:
    """Data source: read one placement group without touching state."""
    return placement_group_from_api(client.get_placement_group(placement_group_id))


def read_placement_group(
    placement_group_id: str, client: VPCClient, repo: StateRepository
) -> PlacementGroup:
    if load_state(repo, RESOURCE_TYPE, placement_group_id, PlacementGroup) is None:
        raise ResourceGone(RESOURCE_TYPE, placement_group_id)
    try:
        group = fetch_placement_group(placement_group_id, client)
    except RemoteCallError as exc:
        if exc.not_found:
            drop_state(repo, RESOURCE_TYPE, placement_group_id)
            raise ResourceGone(RESOURCE_TYPE, placement_group_id) from exc
        raise
    save_state(repo, RESOURCE_TYPE, group.id, group)
    return group


def update_placement_group(
    placement_group_id: str,
    request: UpdatePlacementGroupRequest,
    client: VPCClient,
    repo: StateRepository,
) -> PlacementGroup:
    result = client.update_placement_group(placement_group_id, {"name": request.name})
    group = placement_group_from_api(result)
    save_state(repo, RESOURCE_TYPE, group.id, group)
    return group


def delete_placement_group(placement_group_id: str, client: VPCClient, repo: StateRepository) -> None:
    client.delete_placement_group(placement_group_id)
    drop_state(repo, RESOURCE_TYPE, placement_group_id)


def list_placement_groups(client: VPCClient) -> list[PlacementGroup]:
    return [placement_group_from_api(pg) for pg in client.list_placement_groups()]
