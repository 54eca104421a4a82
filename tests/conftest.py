import sys
from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vpcprovider.dependencies.api import get_current_client
from vpcprovider.dependencies.cloud import get_vpc_client
from vpcprovider.dependencies.dao import get_state_repository
from vpcprovider.exceptions import RemoteCallError
from vpcprovider.main import app


class InMemoryStateRepository:
    def __init__(self):
        self.store: dict[str, dict] = {}

    def save(self, record: dict) -> None:
        self.store[record["resource_key"]] = record

    def get(self, key: str):
        return self.store.get(key)

    def list_all(self, resource_type: Optional[str] = None):
        return [
            r for r in self.store.values()
            if resource_type is None or r["resource_type"] == resource_type
        ]

    def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None


class FakeVPCClient:
    """
    Stand-in for VPCClient backed by dicts.

    Every call is appended to ``calls`` as ``(method, args)``.  Put a
    RemoteCallError in ``failures[method]`` to make that method raise it.
    """

    def __init__(self):
        self.vpcs: dict[str, dict] = {}
        self.bindings: dict[str, dict[str, dict]] = {}
        self.placement_groups: dict[str, dict] = {}
        self.routes: dict[tuple, list[dict]] = {}
        self.calls: list[tuple] = []
        self.failures: dict[str, RemoteCallError] = {}
        self._seq = 0

    def add_vpc(self, vpc_id: str, crn: Optional[str] = None) -> None:
        self.vpcs[vpc_id] = {
            "id": vpc_id,
            "crn": crn or f"crn:v1:bluemix:public:is:us-south:a/acc::vpc:{vpc_id}",
            "dns": {
                "enable_hub": False,
                "resolution_binding_count": 0,
                "resolver": {"type": "system"},
            },
        }
        self.bindings.setdefault(vpc_id, {})

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def _record(self, method: str, *args) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise self.failures[method]

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}-{self._seq}"

    def _vpc(self, vpc_id: str) -> dict:
        if vpc_id not in self.vpcs:
            raise RemoteCallError(f"Error getting VPC: VPC {vpc_id} not found", 404)
        return self.vpcs[vpc_id]

    # ── VPC ───────────────────────────────────────────────────────────────────

    def get_vpc(self, vpc_id):
        self._record("get_vpc", vpc_id)
        return self._vpc(vpc_id)

    def update_vpc(self, vpc_id, vpc_patch, description="Error updating VPC"):
        self._record("update_vpc", vpc_id, vpc_patch)
        vpc = self._vpc(vpc_id)
        dns_patch = vpc_patch["dns"]
        resolver_patch = dns_patch["resolver"]
        resolver: dict = {"type": resolver_patch["type"]}
        if "manual_servers" in resolver_patch:
            resolver["manual_servers"] = resolver_patch["manual_servers"]
        if resolver_patch.get("vpc"):
            target = dict(resolver_patch["vpc"])
            for other in self.vpcs.values():
                if other["id"] == target.get("id") or other["crn"] == target.get("crn"):
                    target = {"id": other["id"], "crn": other["crn"]}
            resolver["vpc"] = target
        vpc["dns"] = {
            "enable_hub": dns_patch["enable_hub"],
            "resolution_binding_count": len(self.bindings.get(vpc_id, {})),
            "resolver": resolver,
        }
        return vpc

    # ── DNS resolution bindings ───────────────────────────────────────────────

    def create_dns_resolution_binding(self, vpc_id, vpc, name=None):
        self._record("create_dns_resolution_binding", vpc_id, vpc, name)
        binding_id = self._next_id("binding")
        binding = {
            "id": binding_id,
            "name": name or f"generated-{binding_id}",
            "vpc": dict(vpc),
            "lifecycle_state": "stable",
            "health_state": "ok",
            "resource_type": "vpc_dns_resolution_binding",
            "href": f"https://vpc.example/v1/vpcs/{vpc_id}/dns_resolution_bindings/{binding_id}",
            "created_at": "2026-10-19T00:00:00Z",
            "endpoint_gateways": [],
        }
        self.bindings.setdefault(vpc_id, {})[binding_id] = binding
        return binding

    def get_dns_resolution_binding(self, vpc_id, binding_id):
        self._record("get_dns_resolution_binding", vpc_id, binding_id)
        try:
            return self.bindings[vpc_id][binding_id]
        except KeyError:
            raise RemoteCallError("Error getting DNS resolution binding: not found", 404)

    def update_dns_resolution_binding(self, vpc_id, binding_id, patch):
        self._record("update_dns_resolution_binding", vpc_id, binding_id, patch)
        binding = self.bindings[vpc_id][binding_id]
        binding.update(patch)
        return binding

    def delete_dns_resolution_binding(self, vpc_id, binding_id):
        self._record("delete_dns_resolution_binding", vpc_id, binding_id)
        if self.bindings.get(vpc_id, {}).pop(binding_id, None) is None:
            raise RemoteCallError("Error deleting DNS resolution binding: not found", 404)

    def list_dns_resolution_bindings(self, vpc_id):
        self._record("list_dns_resolution_bindings", vpc_id)
        return list(self.bindings.get(vpc_id, {}).values())

    # ── Placement groups ──────────────────────────────────────────────────────

    def create_placement_group(self, strategy, name=None, resource_group_id=None):
        self._record("create_placement_group", strategy, name, resource_group_id)
        group_id = self._next_id("pg")
        group = {
            "id": group_id,
            "strategy": strategy,
            "name": name or f"generated-{group_id}",
            "resource_group": {"id": resource_group_id or "default-rg"},
            "created_at": "2026-10-19T00:00:00Z",
            "crn": f"crn:v1:bluemix:public:is:us-south:a/acc::placement-group:{group_id}",
            "href": f"https://vpc.example/v1/placement_groups/{group_id}",
            "lifecycle_state": "stable",
            "resource_type": "placement_group",
        }
        self.placement_groups[group_id] = group
        return group

    def get_placement_group(self, placement_group_id):
        self._record("get_placement_group", placement_group_id)
        if placement_group_id not in self.placement_groups:
            raise RemoteCallError("Error getting placement group: not found", 404)
        return self.placement_groups[placement_group_id]

    def update_placement_group(self, placement_group_id, patch):
        self._record("update_placement_group", placement_group_id, patch)
        self.placement_groups[placement_group_id].update(patch)
        return self.placement_groups[placement_group_id]

    def delete_placement_group(self, placement_group_id):
        self._record("delete_placement_group", placement_group_id)
        self.placement_groups.pop(placement_group_id, None)

    def list_placement_groups(self):
        self._record("list_placement_groups")
        return list(self.placement_groups.values())

    # ── Routing tables ────────────────────────────────────────────────────────

    def list_routing_table_routes(self, vpc_id, routing_table_id):
        self._record("list_routing_table_routes", vpc_id, routing_table_id)
        return self.routes.get((vpc_id, routing_table_id), [])


@pytest.fixture()
def repo():
    return InMemoryStateRepository()


@pytest.fixture()
def vpc_client():
    fake = FakeVPCClient()
    fake.add_vpc("v1")
    fake.add_vpc("v2")
    return fake


@pytest.fixture()
def client(repo, vpc_client):
    app.dependency_overrides[get_current_client] = lambda: "test-client"
    app.dependency_overrides[get_vpc_client] = lambda: vpc_client
    app.dependency_overrides[get_state_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
