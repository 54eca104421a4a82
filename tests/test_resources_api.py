from fastapi import status


def test_binding_endpoints(client, vpc_client):
    create = client.post(
        "/vpcs/v1/dns-resolution-bindings", json={"name": "to-hub", "vpc_id": "v2"}
    )
    assert create.status_code == status.HTTP_201_CREATED
    binding_id = create.json()["id"]

    listed = client.get("/vpcs/v1/dns-resolution-bindings").json()
    assert listed["count"] == 1
    assert listed["dns_resolution_bindings"][0]["name"] == "to-hub"

    renamed = client.patch(f"/vpcs/v1/dns-resolution-bindings/{binding_id}", json={"name": "hub-2"})
    assert renamed.json()["name"] == "hub-2"

    assert client.get(f"/vpcs/v1/dns-resolution-bindings/{binding_id}").status_code == 200

    delete = client.delete(f"/vpcs/v1/dns-resolution-bindings/{binding_id}")
    assert delete.status_code == status.HTTP_204_NO_CONTENT
    missing = client.get(f"/vpcs/v1/dns-resolution-bindings/{binding_id}")
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_binding_without_target_is_unprocessable(client):
    response = client.post("/vpcs/v1/dns-resolution-bindings", json={"name": "to-hub"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_placement_group_endpoints(client):
    create = client.post("/placement-groups", json={"strategy": "power_spread", "name": "db"})
    assert create.status_code == status.HTTP_201_CREATED
    group_id = create.json()["id"]

    assert client.get("/placement-groups").json()["count"] == 1
    assert client.patch(f"/placement-groups/{group_id}", json={"name": "db-2"}).json()["name"] == "db-2"
    assert client.delete(f"/placement-groups/{group_id}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/placement-groups/{group_id}").status_code == status.HTTP_404_NOT_FOUND


def test_placement_group_rejects_unknown_strategy(client):
    response = client.post("/placement-groups", json={"strategy": "anywhere"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_routes_endpoint(client, vpc_client):
    vpc_client.routes[("v1", "rt1")] = [
        {"id": "r1", "destination": "0.0.0.0/0", "next_hop": {"address": "10.0.0.1"}},
        {"id": "r2", "creator": {"id": "srv-1", "resource_type": "vpn_server"}},
    ]

    response = client.get("/vpcs/v1/routing-tables/rt1/routes")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["count"] == 2
    assert body["routes"][0] == {
        "id": "r1",
        "destination": "0.0.0.0/0",
        "nexthop": "10.0.0.1",
        "next_hop_details": {"kind": "ip", "address": "10.0.0.1"},
    }
    assert body["routes"][1]["creator"] == {
        "kind": "vpn_server",
        "id": "srv-1",
        "resource_type": "vpn_server",
    }


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_unmanaged_objects_are_not_adopted_by_read(client, vpc_client, repo):
    group = vpc_client.create_placement_group("host_spread", name="foreign")
    binding = vpc_client.create_dns_resolution_binding("v1", {"id": "v2"}, name="foreign")

    assert client.get(f"/placement-groups/{group['id']}").status_code == status.HTTP_404_NOT_FOUND
    missing = client.get(f"/vpcs/v1/dns-resolution-bindings/{binding['id']}")
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert repo.store == {}


def test_lookup_reads_without_managing(client, vpc_client, repo):
    group = vpc_client.create_placement_group("host_spread", name="foreign")
    binding = vpc_client.create_dns_resolution_binding("v1", {"id": "v2"}, name="foreign")

    pg = client.get(f"/placement-groups/{group['id']}/lookup")
    b = client.get(f"/vpcs/v1/dns-resolution-bindings/{binding['id']}/lookup")

    assert pg.status_code == status.HTTP_200_OK
    assert pg.json()["name"] == "foreign"
    assert b.status_code == status.HTTP_200_OK
    assert b.json()["vpc"]["id"] == "v2"
    assert repo.store == {}


def test_lookup_of_missing_object_is_not_found(client):
    response = client.get("/placement-groups/pg-404/lookup")
    assert response.status_code == status.HTTP_404_NOT_FOUND
