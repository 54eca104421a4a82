"""
IBM Cloud VPC helper — a thin, explicitly constructed wrapper over
``ibm_vpc.VpcV1``.

Every public method maps 1:1 onto one SDK call and returns the decoded JSON
body (``DetailedResponse.get_result()``).  SDK failures are re-raised as
``RemoteCallError`` carrying a call-site message and the HTTP status code.

List methods follow the collection's ``next.href`` cursor: the ``start``
query parameter is extracted and fed back until the service stops returning
a ``next`` link.
"""

import logging
from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

from ibm_cloud_sdk_core import ApiException
from ibm_cloud_sdk_core.authenticators import IAMAuthenticator
from ibm_vpc import VpcV1

from vpcprovider.config import Settings, settings
from vpcprovider.exceptions import ClientConfigurationError, RemoteCallError

logger = logging.getLogger(__name__)


def build_vpc_service(cfg: Settings = settings) -> VpcV1:
    """Build an authenticated ``VpcV1`` service from provider settings."""
    if not cfg.ibmcloud_api_key:
        raise ClientConfigurationError(
            "IBMCLOUD_API_KEY is not set; cannot authenticate against the VPC API."
        )
    try:
        authenticator = IAMAuthenticator(cfg.ibmcloud_api_key)
        service = VpcV1(version=cfg.vpc_api_version, authenticator=authenticator)
        service.set_service_url(cfg.vpc_service_url)
    except ValueError as exc:
        raise ClientConfigurationError(f"Invalid VPC client configuration: {exc}") from exc
    service.set_http_config({"timeout": cfg.vpc_http_timeout})
    return service


def next_start(collection: dict) -> Optional[str]:
    """
    Return the ``start`` token of the collection's ``next`` link.

    ``None`` means the collection is exhausted.
    """
    next_info = collection.get("next")
    if not next_info or not next_info.get("href"):
        return None
    query = parse_qs(urlparse(next_info["href"]).query)
    values = query.get("start")
    if not values or not values[0]:
        return None
    return values[0]


class VPCClient:
    """Per-call facade over ``VpcV1`` used by the service layer."""

    def __init__(self, service: VpcV1, page_limit: int = 50) -> None:
        self._service = service
        self._page_limit = page_limit

    @classmethod
    def from_settings(cls, cfg: Settings = settings) -> "VPCClient":
        return cls(build_vpc_service(cfg), page_limit=cfg.list_page_limit)

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _call(self, description: str, method: Callable, *args, **kwargs):
        try:
            response = method(*args, **kwargs)
        except ApiException as exc:
            logger.error("%s: %s (status %s)", description, exc.message, exc.code)
            raise RemoteCallError(f"{description}: {exc.message}", exc.code) from exc
        return response.get_result()

    def _list_all(self, description: str, method: Callable, key: str, *args, **kwargs) -> list[dict]:
        items: list[dict] = []
        start: Optional[str] = None
        while True:
            page = self._call(
                description, method, *args, start=start, limit=self._page_limit, **kwargs
            )
            items.extend(page.get(key, []))
            start = next_start(page)
            if start is None:
                break
        logger.info("Listed %d %s.", len(items), key.replace("_", " "))
        return items

    # ── VPC ───────────────────────────────────────────────────────────────────

    def get_vpc(self, vpc_id: str) -> dict:
        return self._call("Error getting VPC", self._service.get_vpc, vpc_id)

    def update_vpc(self, vpc_id: str, vpc_patch: dict, description: str = "Error updating VPC") -> dict:
        logger.info("Patching VPC %s", vpc_id)
        return self._call(description, self._service.update_vpc, vpc_id, vpc_patch)

    # ── DNS resolution bindings ───────────────────────────────────────────────

    def create_dns_resolution_binding(self, vpc_id: str, vpc: dict, name: Optional[str] = None) -> dict:
        logger.info("Creating DNS resolution binding on VPC %s -> %s", vpc_id, vpc)
        kwargs = {"name": name} if name else {}
        return self._call(
            "Error creating DNS resolution binding",
            self._service.create_vpc_dns_resolution_binding,
            vpc_id,
            vpc,
            **kwargs,
        )

    def get_dns_resolution_binding(self, vpc_id: str, binding_id: str) -> dict:
        return self._call(
            "Error getting DNS resolution binding",
            self._service.get_vpc_dns_resolution_binding,
            vpc_id,
            binding_id,
        )

    def update_dns_resolution_binding(self, vpc_id: str, binding_id: str, patch: dict) -> dict:
        logger.info("Updating DNS resolution binding %s on VPC %s", binding_id, vpc_id)
        return self._call(
            "Error updating DNS resolution binding",
            self._service.update_vpc_dns_resolution_binding,
            vpc_id,
            binding_id,
            patch,
        )

    def delete_dns_resolution_binding(self, vpc_id: str, binding_id: str) -> None:
        logger.info("Deleting DNS resolution binding %s on VPC %s", binding_id, vpc_id)
        self._call(
            "Error deleting DNS resolution binding",
            self._service.delete_vpc_dns_resolution_binding,
            vpc_id,
            binding_id,
        )

    def list_dns_resolution_bindings(self, vpc_id: str) -> list[dict]:
        return self._list_all(
            "Error listing DNS resolution bindings",
            self._service.list_vpc_dns_resolution_bindings,
            "dns_resolution_bindings",
            vpc_id,
        )

    # ── Placement groups ──────────────────────────────────────────────────────

    def create_placement_group(
        self,
        strategy: str,
        name: Optional[str] = None,
        resource_group_id: Optional[str] = None,
    ) -> dict:
        kwargs: dict = {}
        if name:
            kwargs["name"] = name
        if resource_group_id:
            kwargs["resource_group"] = {"id": resource_group_id}
        logger.info("Creating placement group (strategy=%s)", strategy)
        return self._call(
            "Error creating placement group",
            self._service.create_placement_group,
            strategy,
            **kwargs,
        )

    def get_placement_group(self, placement_group_id: str) -> dict:
        return self._call(
            "Error getting placement group", self._service.get_placement_group, placement_group_id
        )

    def update_placement_group(self, placement_group_id: str, patch: dict) -> dict:
        logger.info("Updating placement group %s", placement_group_id)
        return self._call(
            "Error updating placement group",
            self._service.update_placement_group,
            placement_group_id,
            patch,
        )

    def delete_placement_group(self, placement_group_id: str) -> None:
        logger.info("Deleting placement group %s", placement_group_id)
        self._call(
            "Error deleting placement group",
            self._service.delete_placement_group,
            placement_group_id,
        )

    def list_placement_groups(self) -> list[dict]:
        return self._list_all(
            "Error listing placement groups",
            self._service.list_placement_groups,
            "placement_groups",
        )

    # ── Routing tables ────────────────────────────────────────────────────────

    def list_routing_table_routes(self, vpc_id: str, routing_table_id: str) -> list[dict]:
        return self._list_all(
            "Error reading list of VPC routing table routes",
            self._service.list_vpc_routing_table_routes,
            "routes",
            vpc_id,
            routing_table_id,
        )
