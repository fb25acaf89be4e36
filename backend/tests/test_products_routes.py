from fastapi.testclient import TestClient

from catalog.api.v1 import products as product_routes
from catalog.main import app


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _token_for(client, register, username, roles=None):
    register(username, "pw12345", roles=roles)
    response = client.post("/api/v1/auth/login", json={"username": username, "password": "pw12345"})
    assert response.status_code == 200
    return response.json()["access_token"]


def _create(client, token, name="Gaming Laptop"):
    return client.post(
        "/api/v1/products",
        json={"name": name, "description": "16 inch"},
        headers=_bearer(token),
    )


def test_user_cannot_create_product_but_admin_can(client, register):
    user_token = _token_for(client, register, "user1")
    admin_token = _token_for(client, register, "admin1", roles=["admin"])

    forbidden = _create(client, user_token)
    assert forbidden.status_code == 403
    assert forbidden.json()["error_code"] == "FORBIDDEN"

    created = _create(client, admin_token)
    assert created.status_code == 201
    assert created.json()["name"] == "Gaming Laptop"


def test_admin_only_update_and_delete(client, register):
    user_token = _token_for(client, register, "user1")
    admin_token = _token_for(client, register, "admin1", roles=["admin"])
    product_id = _create(client, admin_token).json()["id"]

    as_user = client.put(f"/api/v1/products/{product_id}", json={"name": "Renamed"}, headers=_bearer(user_token))
    assert as_user.status_code == 403

    as_admin = client.put(f"/api/v1/products/{product_id}", json={"name": "Renamed"}, headers=_bearer(admin_token))
    assert as_admin.status_code == 200
    assert as_admin.json()["name"] == "Renamed"
    assert as_admin.json()["description"] == "16 inch"

    assert client.delete(f"/api/v1/products/{product_id}", headers=_bearer(user_token)).status_code == 403
    assert client.get(f"/api/v1/products/{product_id}", headers=_bearer(user_token)).status_code == 200

    deleted = client.delete(f"/api/v1/products/{product_id}", headers=_bearer(admin_token))
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/products/{product_id}", headers=_bearer(admin_token)).status_code == 404


def test_any_authenticated_user_can_read(client, register):
    admin_token = _token_for(client, register, "admin1", roles=["admin"])
    user_token = _token_for(client, register, "user1")
    _create(client, admin_token, "Pixel 8 Pro")
    _create(client, admin_token, "Headphones")

    response = client.get("/api/v1/products", headers=_bearer(user_token))

    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Pixel 8 Pro", "Headphones"]


def test_products_require_authentication(client):
    assert client.get("/api/v1/products").status_code == 401
    assert client.get("/api/v1/products", headers=_bearer("not-a-token")).status_code == 401
    assert client.post("/api/v1/products", json={"name": "x"}).status_code == 401


def test_unrecognized_requested_role_gets_user_privileges(client, register):
    token = _token_for(client, register, "sneaky", roles=["superadmin"])
    assert _create(client, token).status_code == 403


def test_unexpected_errors_do_not_leak_details(client, register, monkeypatch):
    token = _token_for(client, register, "user1")

    def explode(db):
        raise RuntimeError("SELECT password_hash FROM users")

    monkeypatch.setattr(product_routes.product_service, "list_products", explode)
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/api/v1/products", headers=_bearer(token))

    assert response.status_code == 500
    assert response.json()["error_code"] == "INTERNAL_SERVER_ERROR"
    assert "password_hash" not in response.text
