from fastapi.testclient import TestClient

from vpcprovider.main import app
from vpcprovider.services.auth import authenticate_client, create_access_token, decode_access_token


def test_auth_token_success(monkeypatch):
    def _ok_client(client_id: str, secret: str) -> bool:
        return client_id == "terraform" and secret == "secret"

    monkeypatch.setattr("vpcprovider.apis.auth.authenticate_client", _ok_client)
    client = TestClient(app)

    response = client.post(
        "/auth/token",
        data={"username": "terraform", "password": "secret"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert decode_access_token(payload["access_token"]) == "terraform"
    assert payload["expires_in"] > 0


def test_auth_token_invalid(monkeypatch):
    monkeypatch.setattr("vpcprovider.apis.auth.authenticate_client", lambda c, s: False)
    client = TestClient(app)

    response = client.post(
        "/auth/token",
        data={"username": "terraform", "password": "bad"},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect client id or secret"


def test_resource_routes_require_token():
    client = TestClient(app)
    assert client.get("/dns-configs").status_code == 401


def test_tampered_token_is_rejected():
    token = create_access_token("terraform") + "x"
    assert decode_access_token(token) is None


def test_authenticate_client_against_settings(monkeypatch):
    monkeypatch.setattr("vpcprovider.services.auth.settings.api_clients", "ci:s3cret, broken")

    assert authenticate_client("ci", "s3cret")
    assert not authenticate_client("ci", "wrong")
    assert not authenticate_client("broken", "")
