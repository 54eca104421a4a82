"""
DNS resolution binding service — CRUD for a single binding plus the
single-item and list data sources.
"""

import logging

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.exceptions import RemoteCallError, ResourceGone
from vpcprovider.schemas.binding import (
    BoundVPCReference,
    CreateBindingRequest,
    DnsResolutionBinding,
    EndpointGatewayReference,
    UpdateBindingRequest,
)
from vpcprovider.services.state import drop_state, load_state, save_state

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "dns_resolution_binding"

_REFERENCE_FIELDS = ("crn", "href", "id", "name", "resource_type")


def _state_id(vpc_id: str, binding_id: str) -> str:
    return f"{vpc_id}/{binding_id}"


def _reference(data: dict) -> dict:
    return {field: data.get(field) for field in _REFERENCE_FIELDS}


def binding_from_api(vpc_id: str, data: dict) -> DnsResolutionBinding:
    """Map a ``VpcdnsResolutionBinding`` result onto the typed model."""
    vpc = data.get("vpc")
    return DnsResolutionBinding(
        id=data["id"],
        vpc_id=vpc_id,
        name=data.get("name"),
        created_at=data.get("created_at"),
        health_state=data.get("health_state"),
        href=data.get("href"),
        lifecycle_state=data.get("lifecycle_state"),
        resource_type=data.get("resource_type"),
        vpc=BoundVPCReference(**_reference(vpc)) if vpc else None,
        endpoint_gateways=[
            EndpointGatewayReference(**_reference(gw)) for gw in data.get("endpoint_gateways") or []
        ],
    )


def create_binding(
    vpc_id: str, request: CreateBindingRequest, client: VPCClient, repo: StateRepository
) -> DnsResolutionBinding:
    result = client.create_dns_resolution_binding(vpc_id, request.vpc_identity(), name=request.name)
    binding = binding_from_api(vpc_id, result)
    save_state(repo, RESOURCE_TYPE, _state_id(vpc_id, binding.id), binding)
    logger.info("DNS resolution binding %s created on VPC %s.", binding.id, vpc_id)
    return binding


def fetch_binding(vpc_id: str, binding_id: str, client: VPCClient) -> DnsResolutionBinding:
    """Data source: read one binding without touching state."""
    return binding_from_api(vpc_id, client.get_dns_resolution_binding(vpc_id, binding_id))


def read_binding(
    vpc_id: str, binding_id: str, client: VPCClient, repo: StateRepository
) -> DnsResolutionBinding:
    """
    Refresh a managed binding from the service.

    Raises ``ResourceGone`` when the binding is not managed, or when it no
    longer exists remotely (its state record is dropped in that case).
    """
    state_id = _state_id(vpc_id, binding_id)
    if load_state(repo, RESOURCE_TYPE, state_id, DnsResolutionBinding) is None:
        raise ResourceGone(RESOURCE_TYPE, binding_id)
    try:
        binding = fetch_binding(vpc_id, binding_id, client)
    except RemoteCallError as exc:
        if exc.not_found:
            drop_state(repo, RESOURCE_TYPE, state_id)
            raise ResourceGone(RESOURCE_TYPE, binding_id) from exc
        raise
    save_state(repo, RESOURCE_TYPE, state_id, binding)
    return binding


def rename_binding(
    vpc_id: str,
    binding_id: str,
    request: UpdateBindingRequest,
    client: VPCClient,
    repo: StateRepository,
) -> DnsResolutionBinding:
    result = client.update_dns_resolution_binding(vpc_id, binding_id, {"name": request.name})
    binding = binding_from_api(vpc_id, result)
    save_state(repo, RESOURCE_TYPE, _state_id(vpc_id, binding_id), binding)
    return binding


def delete_binding(vpc_id: str, binding_id: str, client: VPCClient, repo: StateRepository) -> None:
    try:
        client.delete_dns_resolution_binding(vpc_id, binding_id)
    except RemoteCallError as exc:
        if not exc.not_found:
            raise
        logger.info("DNS resolution binding %s already gone.", binding_id)
    drop_state(repo, RESOURCE_TYPE, _state_id(vpc_id, binding_id))


def list_bindings(vpc_id: str, client: VPCClient) -> list[DnsResolutionBinding]:
    """Data source: every binding of *vpc_id*, across all pages."""
    return [binding_from_api(vpc_id, b) for b in client.list_dns_resolution_bindings(vpc_id)]
