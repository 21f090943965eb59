"""
End-to-end tests through the HTTP API.
"""

import pytest

from conftest import SUPERADMIN_EMAIL, auth_headers, login

API = "/api/v1"


def register(client, headers, email, role_id="2", first_name="Jeanne"):
    return client.post(f"{API}/users/register", headers=headers, json={
        "first_name": first_name,
        "last_name": "Martin",
        "email": email,
        "password": "password123",
        "role_id": role_id,
    })


def new_user_headers(client, admin_headers, email, role_id="2"):
    response = register(client, admin_headers, email, role_id=role_id)
    assert response.status_code == 201, response.text
    return auth_headers(login(client, email, "password123"))


def create_property(client, headers, name="Villa Soleil", **extra):
    return client.post(f"{API}/properties", headers=headers, json={
        "name": name,
        "address": "1 rue du Port",
        "city": "Nice",
        "country": "France",
        **extra,
    })


# =============================================================================
# Health & Errors
# =============================================================================


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get(f"{API}/health").status_code == 200


# =============================================================================
# Auth
# =============================================================================


class TestLogin:
    def test_login_returns_token_in_body_and_header(self, client):
        response = client.post(f"{API}/auth/login", json={
            "email": SUPERADMIN_EMAIL, "password": "root-password",
        })

        assert response.status_code == 200
        body = response.json()
        assert response.headers["Authorization"] == f"Bearer {body['token']}"
        assert body["user"]["email"] == SUPERADMIN_EMAIL
        assert body["user"]["role_id"] == "4"
        assert "password_hash" not in body["user"]

    @pytest.mark.parametrize("email, password", [
        (SUPERADMIN_EMAIL, "wrong-password"),
        ("nobody@example.com", "root-password"),
    ])
    def test_bad_credentials_look_the_same(self, client, email, password):
        response = client.post(f"{API}/auth/login", json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"

    def test_missing_token(self, client):
        response = client.get(f"{API}/users/profile")

        assert response.status_code == 401
        assert response.json()["error_code"] == "MISSING_TOKEN"

    def test_invalid_token(self, client):
        response = client.get(f"{API}/users/profile", headers=auth_headers("nope"))

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"

    def test_raw_bearer_header_accepted(self, client):
        token = login(client, SUPERADMIN_EMAIL, "root-password")

        response = client.get(f"{API}/users/profile", headers={"Bearer": token})

        assert response.status_code == 200
        assert response.json()["user"]["role"]["slug"] == "superadmin"


class TestRoles:
    def test_admin_can_list(self, client, superadmin_headers):
        admin = new_user_headers(client, superadmin_headers, "admin@example.com", role_id="3")

        response = client.get(f"{API}/auth/roles", headers=admin)

        assert response.status_code == 200
        assert response.json()["count"] == 4

    def test_host_cannot_list(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com", role_id="2")

        assert client.get(f"{API}/auth/roles", headers=host).status_code == 403

    def test_only_super_admin_creates(self, client, superadmin_headers):
        admin = new_user_headers(client, superadmin_headers, "admin@example.com", role_id="3")

        assert client.post(f"{API}/auth/roles", headers=admin, json={"name": "Moderator"}).status_code == 403

        response = client.post(f"{API}/auth/roles", headers=superadmin_headers, json={"name": "Moderator"})
        assert response.status_code == 201
        assert response.json()["role"]["id"] == "5"

        again = client.post(f"{API}/auth/roles", headers=superadmin_headers, json={"name": "Moderator"})
        assert again.status_code == 409

    def test_delete_roles(self, client, superadmin_headers):
        created = client.post(f"{API}/auth/roles", headers=superadmin_headers, json={"name": "Temp"}).json()["role"]

        assert client.delete(f"{API}/auth/roles/3", headers=superadmin_headers).status_code == 403
        assert client.delete(f"{API}/auth/roles/{created['id']}", headers=superadmin_headers).status_code == 200
        assert client.delete(f"{API}/auth/roles/{created['id']}", headers=superadmin_headers).status_code == 404


# =============================================================================
# Users
# =============================================================================


class TestUsers:
    def test_registration_and_duplicate_email(self, client, superadmin_headers):
        admin = new_user_headers(client, superadmin_headers, "admin@example.com", role_id="3")

        assert register(client, admin, "one@example.com").status_code == 201
        assert register(client, admin, "two@example.com").status_code == 201

        duplicate = register(client, admin, "one@example.com")
        assert duplicate.status_code == 409
        assert duplicate.json()["error_code"] == "DUPLICATE_NAME"

    def test_registration_needs_admin(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        assert register(client, host, "x@example.com").status_code == 403
        assert register(client, {}, "x@example.com").status_code == 401

    def test_unknown_role(self, client, superadmin_headers):
        assert register(client, superadmin_headers, "x@example.com", role_id="99").status_code == 400

    def test_invalid_payload(self, client, superadmin_headers):
        response = client.post(f"{API}/users/register", headers=superadmin_headers, json={"email": "not-an-email"})

        assert response.status_code == 422

    def test_blank_first_name_rejected(self, client, superadmin_headers):
        assert register(client, superadmin_headers, "x@example.com", first_name="  ").status_code == 422

    def test_list_users(self, client, superadmin_headers):
        register(client, superadmin_headers, "one@example.com")

        body = client.get(f"{API}/users", headers=superadmin_headers).json()

        assert body["count"] == 2
        assert {u["role"]["slug"] for u in body["users"]} == {"superadmin", "loueur"}

    def test_own_profile(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        updated = client.put(f"{API}/users/profile", headers=host, json={"first_name": "Claire"})
        assert updated.status_code == 200
        assert updated.json()["user"]["first_name"] == "Claire"

        profile = client.get(f"{API}/users/profile", headers=host).json()["user"]
        assert profile["first_name"] == "Claire"
        assert profile["role"]["id"] == "2"

    def test_profile_update_cannot_change_role(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        response = client.put(f"{API}/users/profile", headers=host, json={"role_id": "4"})

        assert response.status_code == 400
        assert client.get(f"{API}/users/profile", headers=host).json()["user"]["role"]["id"] == "2"

    def test_admin_update_and_delete(self, client, superadmin_headers):
        user_id = register(client, superadmin_headers, "one@example.com").json()["user"]["id"]

        assert client.put(f"{API}/users/{user_id}", headers=superadmin_headers, json={}).status_code == 400

        updated = client.put(f"{API}/users/{user_id}", headers=superadmin_headers, json={"role_id": "1"})
        assert updated.json()["user"]["role_id"] == "1"

        assert client.delete(f"{API}/users/{user_id}", headers=superadmin_headers).status_code == 200
        assert client.delete(f"{API}/users/{user_id}", headers=superadmin_headers).status_code == 404

    def test_delete_own_account(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")
        create_property(client, host)

        assert client.delete(f"{API}/users/profile", headers=host).status_code == 200
        assert client.get(f"{API}/users/profile", headers=host).status_code == 404


# =============================================================================
# Properties
# =============================================================================


class TestProperties:
    def test_create_returns_camel_case_draft(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        response = create_property(client, host, zipCode="06000", wifi={"enabled": True, "networkName": "Soleil"})

        assert response.status_code == 201
        prop = response.json()["property"]
        assert prop["slug"] == "villa-soleil"
        assert prop["status"] == 1
        assert prop["zipCode"] == "06000"
        assert prop["wifi"]["networkName"] == "Soleil"
        assert prop["checkInOut"]["enabled"] is False
        assert "hostId" in prop

    def test_same_name_twice_for_one_host(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        assert create_property(client, host, "Villa Soleil").status_code == 201
        assert create_property(client, host, "Villa Soleil").status_code == 409

    def test_same_name_across_hosts_gets_suffix(self, client, superadmin_headers):
        slugs = []
        for i in range(3):
            host = new_user_headers(client, superadmin_headers, f"host{i}@example.com")
            slugs.append(create_property(client, host, "Café de l'Été").json()["property"]["slug"])

        assert slugs == ["cafe-de-l-ete", "cafe-de-l-ete-1", "cafe-de-l-ete-2"]

    def test_create_needs_token(self, client):
        assert create_property(client, {}).status_code == 401

    def test_blank_name_rejected(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")

        assert create_property(client, host, "   ").status_code == 422
        assert client.get(f"{API}/properties/property", headers=host).status_code == 404

    def test_draft_visibility(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")
        other = new_user_headers(client, superadmin_headers, "other@example.com")
        prop = create_property(client, host).json()["property"]

        assert client.get(f"{API}/properties/{prop['slug']}", headers=host).status_code == 200
        assert client.get(f"{API}/properties/{prop['slug']}", headers=other).status_code == 404
        assert client.get(f"{API}/properties/{prop['id']}").status_code == 404
        assert client.get(f"{API}/properties").json()["count"] == 0

        owner_id = prop["hostId"]
        assert client.get(f"{API}/properties/user/{owner_id}", headers=host).json()["count"] == 1
        assert client.get(f"{API}/properties/user/{owner_id}").json()["count"] == 0

    def test_publish_flow(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")
        other = new_user_headers(client, superadmin_headers, "other@example.com")
        prop = create_property(client, host).json()["property"]

        assert client.post(f"{API}/properties/{prop['id']}/publish", headers=other).status_code == 403

        published = client.post(f"{API}/properties/{prop['id']}/publish", headers=host).json()["property"]
        assert published["status"] == 2
        assert published["publishedAt"] is not None

        listing = client.get(f"{API}/properties", params={"limit": 10}).json()
        assert [p["slug"] for p in listing["properties"]] == ["villa-soleil"]
        assert client.get(f"{API}/properties/villa-soleil").status_code == 200

    def test_update_and_delete_need_owner(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")
        prop = create_property(client, host).json()["property"]

        assert client.put(f"{API}/properties/{prop['id']}", headers=superadmin_headers,
                          json={"city": "Paris"}).status_code == 403
        assert client.delete(f"{API}/properties/{prop['id']}", headers=superadmin_headers).status_code == 403

        renamed = client.put(f"{API}/properties/{prop['slug']}", headers=host, json={"name": "Mas Provençal"})
        assert renamed.status_code == 200
        assert renamed.json()["property"]["slug"] == "mas-provencal"

        assert client.delete(f"{API}/properties/mas-provencal", headers=host).status_code == 200
        assert client.get(f"{API}/properties/{prop['id']}", headers=host).status_code == 404

    def test_pagination_bounds(self, client):
        assert client.get(f"{API}/properties", params={"limit": 0}).status_code == 422
        assert client.get(f"{API}/properties", params={"skip": -1}).status_code == 422


# =============================================================================
# Logements
# =============================================================================


class TestLogements:
    def test_create_and_list(self, client, superadmin_headers):
        host = new_user_headers(client, superadmin_headers, "host@example.com")
        payload = {"nom_bien": "Studio", "adresse": "2 rue", "ville": "Lyon", "pays": "France"}

        created = client.post(f"{API}/logements", headers=host, json=payload)
        assert created.status_code == 201
        owner_id = created.json()["logement"]["user_id"]

        assert client.post(f"{API}/logements", headers=host, json=payload).status_code == 409
        assert client.get(f"{API}/logements/user/{owner_id}", headers=host).json()["count"] == 1
        assert client.get(f"{API}/logements/user/{owner_id}").json()["count"] == 0
