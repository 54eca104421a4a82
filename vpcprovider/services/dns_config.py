"""
VPC DNS configuration service — drives a VPC's DNS resolver between the
``system``, ``manual`` and ``delegated`` modes.

Delegating resolution to another VPC needs an auxiliary DNS resolution
binding on the delegating VPC.  The binding is created before the VPC is
patched and removed again when the patch fails, when the resolver leaves
``delegated`` mode, or when the configuration is deleted.

Flow (create)
─────────────
1. Validate the desired configuration locally.
2. ``delegated`` only: create the binding to the resolver VPC.
3. Patch the VPC ``dns`` block.
4. Patch failed and a binding was created: delete it, re-raise.
5. Persist state (id = VPC id) and read it back.
"""

import logging
from typing import Optional

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.dao.base import StateRepository
from vpcprovider.exceptions import ConfigurationError, RemoteCallError, ResourceGone
from vpcprovider.schemas.dns_config import (
    CreateDnsConfigRequest,
    DnsConfigSettings,
    DnsConfigState,
    ManualServer,
)
from vpcprovider.services.state import drop_state, list_states, load_state, save_state

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "dns_config"


def system_dns_patch() -> dict:
    """Fresh ``VPCPatch`` body resetting the resolver to ``system``."""
    return {"dns": {"enable_hub": False, "resolver": {"type": "system"}}}


# ── Validation ────────────────────────────────────────────────────────────────

def validate_dns_config(desired: CreateDnsConfigRequest) -> None:
    """Raise ``ConfigurationError`` when *desired* violates a resolver constraint."""
    if desired.resolver_type == "delegated":
        has_id = bool(desired.resolver_vpc_id)
        has_crn = bool(desired.resolver_vpc_crn)
        if not has_id and not has_crn:
            raise ConfigurationError(
                "either resolver_vpc_id or resolver_vpc_crn must be specified "
                "when resolver_type is 'delegated'"
            )
        if has_id and has_crn:
            raise ConfigurationError(
                "only one of resolver_vpc_id or resolver_vpc_crn may be specified "
                "when resolver_type is 'delegated'"
            )
        if desired.enable_hub:
            raise ConfigurationError("enable_hub must be false when resolver_type is 'delegated'")
    elif desired.resolver_type == "manual":
        if not desired.manual_servers:
            raise ConfigurationError(
                "manual_servers must be specified when resolver_type is 'manual'"
            )


# ── Patch construction ────────────────────────────────────────────────────────

def resolver_vpc_identity(desired: CreateDnsConfigRequest) -> dict:
    if desired.resolver_vpc_id:
        return {"id": desired.resolver_vpc_id}
    return {"crn": desired.resolver_vpc_crn}


def build_dns_patch(desired: CreateDnsConfigRequest) -> dict:
    """Build the ``VPCPatch`` body carrying the desired ``dns`` block."""
    resolver: dict = {"type": desired.resolver_type}
    if desired.resolver_type == "manual":
        servers = []
        for server in desired.manual_servers:
            entry: dict = {"address": server.address}
            if server.zone_affinity:
                entry["zone_affinity"] = {"name": server.zone_affinity}
            servers.append(entry)
        resolver["manual_servers"] = servers
    elif desired.resolver_type == "delegated":
        resolver["vpc"] = resolver_vpc_identity(desired)
    return {"dns": {"enable_hub": desired.enable_hub, "resolver": resolver}}


# ── Remote helpers ────────────────────────────────────────────────────────────

def _create_binding(desired: CreateDnsConfigRequest, client: VPCClient) -> dict:
    return client.create_dns_resolution_binding(
        desired.vpc_id,
        resolver_vpc_identity(desired),
        name=desired.dns_binding_name,
    )


def _patch_dns(desired: CreateDnsConfigRequest, client: VPCClient) -> None:
    client.update_vpc(
        desired.vpc_id,
        build_dns_patch(desired),
        description="Error updating VPC DNS configuration",
    )


def _delete_binding_quietly(client: VPCClient, vpc_id: str, binding_id: str, reason: str) -> None:
    """Delete a binding, logging rather than raising on failure."""
    try:
        client.delete_dns_resolution_binding(vpc_id, binding_id)
    except RemoteCallError as exc:
        logger.warning(
            "Error deleting DNS resolution binding %s on VPC %s (%s): %s",
            binding_id,
            vpc_id,
            reason,
            exc,
        )


def _lookup_binding_name(client: VPCClient, vpc_id: str, binding_id: str) -> Optional[str]:
    try:
        bindings = client.list_dns_resolution_bindings(vpc_id)
    except RemoteCallError as exc:
        logger.warning("Could not list DNS resolution bindings of VPC %s: %s", vpc_id, exc)
        return None
    for binding in bindings:
        if binding.get("id") == binding_id:
            return binding.get("name")
    return None


def _resolver_target_changed(prior: DnsConfigState, desired: CreateDnsConfigRequest) -> bool:
    if desired.resolver_vpc_id:
        return desired.resolver_vpc_id != prior.resolver_vpc_id
    return desired.resolver_vpc_crn != prior.resolver_vpc_crn


# ── Read-back ─────────────────────────────────────────────────────────────────

def project_dns(prior: DnsConfigState, dns: dict) -> DnsConfigState:
    """Overlay the VPC's ``dns`` block on *prior*, keeping binding fields."""
    resolver = dns.get("resolver") or {}
    resolver_type = resolver.get("type") or prior.resolver_type

    manual_servers = [
        ManualServer(
            address=server["address"],
            zone_affinity=(server.get("zone_affinity") or {}).get("name"),
        )
        for server in resolver.get("manual_servers") or []
    ]

    resolver_vpc = resolver.get("vpc") or {}
    return prior.model_copy(
        update={
            "enable_hub": bool(dns.get("enable_hub", prior.enable_hub)),
            "resolution_binding_count": dns.get("resolution_binding_count") or 0,
            "resolver_type": resolver_type,
            "manual_servers": manual_servers,
            "resolver_vpc_id": resolver_vpc.get("id"),
            "resolver_vpc_crn": resolver_vpc.get("crn"),
        }
    )


def _refresh(prior: DnsConfigState, client: VPCClient, repo: StateRepository) -> DnsConfigState:
    try:
        vpc = client.get_vpc(prior.vpc_id)
    except RemoteCallError as exc:
        if exc.not_found:
            logger.warning("VPC %s is gone; dropping its DNS configuration state.", prior.vpc_id)
            drop_state(repo, RESOURCE_TYPE, prior.vpc_id)
            raise ResourceGone(RESOURCE_TYPE, prior.vpc_id) from exc
        raise

    state = project_dns(prior, vpc.get("dns") or {})

    if state.resolver_type == "delegated" and state.dns_resolution_binding_id:
        name = _lookup_binding_name(client, state.vpc_id, state.dns_resolution_binding_id)
        if name:
            state.dns_binding_name = name

    save_state(repo, RESOURCE_TYPE, state.vpc_id, state)
    return state


# ── Operations ────────────────────────────────────────────────────────────────

def create_dns_config(
    desired: CreateDnsConfigRequest,
    client: VPCClient,
    repo: StateRepository,
) -> DnsConfigState:
    """
    Drive the VPC's DNS resolver into *desired* and return the realized state.

    Raises
    ------
    ConfigurationError
        The configuration is invalid; no remote call has been made.
    RemoteCallError
        Binding creation or the VPC patch failed.  A binding created by this
        call has been deleted again before the patch error is raised.
    """
    validate_dns_config(desired)

    binding_id: Optional[str] = None
    binding_name: Optional[str] = None

    if desired.resolver_type == "delegated":
        binding = _create_binding(desired, client)
        binding_id = binding["id"]
        binding_name = binding.get("name")
        logger.info("DNS resolution binding %s created on VPC %s", binding_id, desired.vpc_id)

    try:
        _patch_dns(desired, client)
    except RemoteCallError:
        if binding_id:
            logger.warning("Rolling back DNS resolution binding %s …", binding_id)
            _delete_binding_quietly(client, desired.vpc_id, binding_id, "rollback")
        raise

    interim = DnsConfigState(
        id=desired.vpc_id,
        **desired.model_dump(exclude={"dns_binding_name"}),
        dns_resolution_binding_id=binding_id,
        dns_binding_name=binding_name,
    )
    save_state(repo, RESOURCE_TYPE, desired.vpc_id, interim)

    logger.info("DNS configuration of VPC %s set to '%s'.", desired.vpc_id, desired.resolver_type)
    return _refresh(interim, client, repo)


def read_dns_config(vpc_id: str, client: VPCClient, repo: StateRepository) -> DnsConfigState:
    """
    Refresh the managed DNS configuration of *vpc_id* from the service.

    Raises ``ResourceGone`` when the configuration is not managed or the VPC
    no longer exists (its state record is dropped in that case).
    """
    prior = load_state(repo, RESOURCE_TYPE, vpc_id, DnsConfigState)
    if prior is None:
        raise ResourceGone(RESOURCE_TYPE, vpc_id)
    return _refresh(prior, client, repo)


def import_dns_config(vpc_id: str, client: VPCClient, repo: StateRepository) -> DnsConfigState:
    """
    Adopt the existing DNS configuration of *vpc_id* into the state store.

    For a delegated resolver the binding pointing at the resolver VPC is
    looked up so that a later delete can remove it.
    """
    state = _refresh(DnsConfigState(id=vpc_id, vpc_id=vpc_id), client, repo)
    if state.resolver_type != "delegated":
        return state

    for binding in client.list_dns_resolution_bindings(vpc_id):
        target = binding.get("vpc") or {}
        if (state.resolver_vpc_id and target.get("id") == state.resolver_vpc_id) or (
            state.resolver_vpc_crn and target.get("crn") == state.resolver_vpc_crn
        ):
            state.dns_resolution_binding_id = binding.get("id")
            state.dns_binding_name = binding.get("name")
            break

    save_state(repo, RESOURCE_TYPE, vpc_id, state)
    return state


def update_dns_config(
    vpc_id: str,
    changes: DnsConfigSettings,
    client: VPCClient,
    repo: StateRepository,
) -> DnsConfigState:
    """
    Move a managed DNS configuration to *changes*.

    Leaving ``delegated`` deletes the old binding first (failure is logged,
    not raised).  Entering ``delegated``, or pointing it at another resolver
    VPC, creates a new binding.  The VPC DNS block is always re-patched.
    """
    desired = CreateDnsConfigRequest(vpc_id=vpc_id, **changes.model_dump())
    validate_dns_config(desired)

    prior = load_state(repo, RESOURCE_TYPE, vpc_id, DnsConfigState)
    if prior is None:
        raise ResourceGone(RESOURCE_TYPE, vpc_id)

    binding_id = prior.dns_resolution_binding_id
    binding_name = prior.dns_binding_name
    created_binding: Optional[str] = None
    replaced_binding: Optional[str] = None
    type_changed = prior.resolver_type != desired.resolver_type

    if type_changed and prior.resolver_type == "delegated":
        if binding_id:
            _delete_binding_quietly(client, vpc_id, binding_id, "resolver type changed")
        binding_id = None
        binding_name = None

    if desired.resolver_type == "delegated":
        if type_changed or _resolver_target_changed(prior, desired):
            # The old binding is only removed after the patch succeeds, so the
            # VPC holds two bindings in between; the service allows several
            # bindings per VPC (see ``resolution_binding_count``).
            replaced_binding = binding_id
            binding = _create_binding(desired, client)
            created_binding = binding["id"]
            binding_id = binding["id"]
            binding_name = binding.get("name")
        elif binding_id and desired.dns_binding_name and desired.dns_binding_name != binding_name:
            client.update_dns_resolution_binding(
                vpc_id, binding_id, {"name": desired.dns_binding_name}
            )
            binding_name = desired.dns_binding_name

    try:
        _patch_dns(desired, client)
    except RemoteCallError:
        if created_binding:
            logger.warning("Rolling back DNS resolution binding %s …", created_binding)
            _delete_binding_quietly(client, vpc_id, created_binding, "rollback")
        raise

    if replaced_binding:
        _delete_binding_quietly(client, vpc_id, replaced_binding, "resolver VPC changed")

    interim = prior.model_copy(
        update={
            **changes.model_dump(),
            "manual_servers": list(changes.manual_servers),
            "dns_resolution_binding_id": binding_id,
            "dns_binding_name": binding_name,
        }
    )
    save_state(repo, RESOURCE_TYPE, vpc_id, interim)
    return _refresh(interim, client, repo)


def delete_dns_config(vpc_id: str, client: VPCClient, repo: StateRepository) -> bool:
    """
    Remove any binding, reset the VPC to the system resolver and drop state.

    Returns ``False`` when no DNS configuration is managed for *vpc_id*.
    A failed binding delete (other than 404) is raised before the VPC is
    touched and the state record is kept, so the delete can be retried.
    """
    prior = load_state(repo, RESOURCE_TYPE, vpc_id, DnsConfigState)
    if prior is None:
        return False

    binding_id = prior.dns_resolution_binding_id
    if binding_id:
        try:
            client.delete_dns_resolution_binding(vpc_id, binding_id)
        except RemoteCallError as exc:
            if not exc.not_found:
                logger.error(
                    "Error deleting DNS resolution binding %s on VPC %s: %s", binding_id, vpc_id, exc
                )
                raise
            logger.info("DNS resolution binding %s already gone.", binding_id)
        else:
            logger.info("DNS resolution binding %s deleted from VPC %s.", binding_id, vpc_id)

    try:
        client.update_vpc(
            vpc_id,
            system_dns_patch(),
            description="Error resetting VPC DNS configuration",
        )
    except RemoteCallError as exc:
        if not exc.not_found:
            raise
        logger.info("VPC %s already gone; nothing to reset.", vpc_id)

    drop_state(repo, RESOURCE_TYPE, vpc_id)
    return True


def list_dns_configs(repo: StateRepository) -> list[DnsConfigState]:
    """Return every managed DNS configuration from the state store."""
    return list_states(repo, RESOURCE_TYPE, DnsConfigState)
