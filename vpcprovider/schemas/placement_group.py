"""
Pydantic schemas for placement groups.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from vpcprovider.schemas.binding import NAME_PATTERN

PlacementStrategy = Literal["host_spread", "power_spread"]


class CreatePlacementGroupRequest(BaseModel):
    """Request body for POST /placement-groups."""

    strategy: PlacementStrategy = Field(
        ...,
        description=(
            "`host_spread`: place on different compute hosts. "
            "`power_spread`: place on compute hosts that use different power sources."
        ),
    )
    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=63,
        pattern=NAME_PATTERN,
        examples=["web-tier-spread"],
        description="Unique user-defined name (randomly generated if omitted).",
    )
    resource_group: Optional[str] = Field(
        None,
        description="Resource group id (the account's default group if omitted).",
    )


class UpdatePlacementGroupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=63, pattern=NAME_PATTERN)


class PlacementGroup(BaseModel):
    id: str
    strategy: PlacementStrategy
    name: Optional[str] = None
    resource_group: Optional[str] = None
    created_at: Optional[str] = None
    crn: Optional[str] = None
    href: Optional[str] = None
    lifecycle_state: Optional[str] = None
    resource_type: Optional[str] = None


class PlacementGroupListResponse(BaseModel):
    """Returned by GET /placement-groups."""

    count: int
    placement_groups: list[PlacementGroup]
