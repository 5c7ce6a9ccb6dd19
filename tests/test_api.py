"""
API tests for the PVZ service.

Exercise the HTTP surface end to end against SQLite:
- auth endpoints and bearer-token checks
- role-based access per route
- the full pickup point cycle (open, add, delete last, close)
- listing with filters and pagination
- error body format {"error": "..."}
"""

import uuid

import pytest

from app.shared.database.models import (
    CITY_MOSCOW,
    CITY_SPB,
    PRODUCT_TYPE_ELECTRONICS,
    PRODUCT_TYPE_CLOTHES,
    STATUS_IN_PROGRESS,
    STATUS_CLOSED,
)

API = "/api/v1"


def open_reception(client, headers, pvz_id):
    return client.post(f"{API}/receptions", json={"pvzId": pvz_id}, headers=headers)


def add_product(client, headers, pvz_id, product_type=PRODUCT_TYPE_ELECTRONICS):
    return client.post(f"{API}/products", json={"pvzId": pvz_id, "type": product_type}, headers=headers)


def delete_last_product(client, headers, pvz_id):
    return client.post(f"{API}/pvz/{pvz_id}/delete_last_product", headers=headers)


def close_last_reception(client, headers, pvz_id):
    return client.post(f"{API}/pvz/{pvz_id}/close_last_reception", headers=headers)


def list_pvz(client, headers, **params):
    return client.get(f"{API}/pvz", params=params, headers=headers)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthEndpoints:

    def test_dummy_login(self, client):
        response = client.post(f"{API}/dummyLogin", json={"role": "moderator"})

        assert response.status_code == 200
        assert response.json()["token"]

    def test_dummy_login_invalid_role(self, client):
        response = client.post(f"{API}/dummyLogin", json={"role": "admin"})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid role"}

    def test_register(self, client):
        response = client.post(
            f"{API}/register",
            json={"email": "a@b.com", "password": "pw", "role": "employee"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "a@b.com"
        assert data["role"] == "employee"
        assert uuid.UUID(data["id"])
        assert "password" not in data and "passwordHash" not in data

    def test_register_duplicate(self, client):
        client.post(f"{API}/register", json={"email": "a@b.com", "password": "pw", "role": "employee"})

        response = client.post(
            f"{API}/register",
            json={"email": "a@b.com", "password": "pw2", "role": "moderator"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "user already exists"}

    @pytest.mark.parametrize("email", ["not-an-email", "x@y.com\n"])
    def test_register_invalid_email(self, client, email):
        response = client.post(
            f"{API}/register",
            json={"email": email, "password": "pw", "role": "employee"},
        )
        login = client.post(f"{API}/login", json={"email": email, "password": "pw"})

        assert response.status_code == 400
        assert response.json() == {"error": "invalid email"}
        assert login.status_code == 401

    def test_register_missing_fields(self, client):
        response = client.post(f"{API}/register", json={"email": "a@b.com"})

        assert response.status_code == 400
        assert "error" in response.json()

    def test_login_and_use_token(self, client):
        client.post(f"{API}/register", json={"email": "mod@b.com", "password": "pw", "role": "moderator"})

        login = client.post(f"{API}/login", json={"email": "mod@b.com", "password": "pw"})
        headers = {"Authorization": f"Bearer {login.json()['token']}"}
        response = client.post(f"{API}/pvz", json={"city": CITY_SPB}, headers=headers)

        assert login.status_code == 200
        assert response.status_code == 201

    def test_login_failures_are_indistinguishable(self, client):
        client.post(f"{API}/register", json={"email": "a@b.com", "password": "pw", "role": "employee"})

        wrong_password = client.post(f"{API}/login", json={"email": "a@b.com", "password": "nope"})
        unknown_email = client.post(f"{API}/login", json={"email": "x@b.com", "password": "pw"})

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"error": "invalid credentials"}


class TestAccessControl:

    def test_missing_header(self, client):
        response = client.get(f"{API}/pvz")

        assert response.status_code == 401
        assert response.json() == {"error": "missing authorization header"}

    def test_malformed_header(self, client):
        response = client.get(f"{API}/pvz", headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "invalid authorization header format"}

    def test_invalid_token(self, client):
        response = client.get(f"{API}/pvz", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json() == {"error": "invalid token"}

    def test_employee_cannot_create_pvz(self, client, employee_headers):
        response = client.post(f"{API}/pvz", json={"city": CITY_MOSCOW}, headers=employee_headers)

        assert response.status_code == 403
        assert response.json() == {"error": "access denied"}

    @pytest.mark.parametrize("method,path", [
        ("post", "/receptions"),
        ("post", "/products"),
        ("post", "/pvz/{pvz_id}/close_last_reception"),
        ("post", "/pvz/{pvz_id}/delete_last_product"),
    ])
    def test_moderator_cannot_run_workflow(self, client, moderator_headers, pvz_id, method, path):
        response = getattr(client, method)(
            API + path.format(pvz_id=pvz_id),
            json={"pvzId": pvz_id, "type": PRODUCT_TYPE_ELECTRONICS},
            headers=moderator_headers,
        )

        assert response.status_code == 403

    def test_both_roles_can_list(self, client, employee_headers, moderator_headers):
        assert list_pvz(client, employee_headers).status_code == 200
        assert list_pvz(client, moderator_headers).status_code == 200


class TestPickupPoints:

    def test_create_pvz(self, client, moderator_headers):
        response = client.post(f"{API}/pvz", json={"city": CITY_MOSCOW}, headers=moderator_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["city"] == CITY_MOSCOW
        assert uuid.UUID(data["id"])
        assert data["registrationDate"]

    def test_create_pvz_invalid_city(self, client, moderator_headers):
        response = client.post(f"{API}/pvz", json={"city": "Новосибирск"}, headers=moderator_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "invalid city"}


class TestReceptionWorkflow:

    def test_open_reception(self, client, employee_headers, pvz_id):
        response = open_reception(client, employee_headers, pvz_id)

        assert response.status_code == 201
        data = response.json()
        assert data["pvzId"] == pvz_id
        assert data["status"] == STATUS_IN_PROGRESS
        assert data["dateTime"]

    def test_open_reception_snake_case_body(self, client, employee_headers, pvz_id):
        response = client.post(f"{API}/receptions", json={"pvz_id": pvz_id}, headers=employee_headers)

        assert response.status_code == 201

    def test_open_reception_twice(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)

        response = open_reception(client, employee_headers, pvz_id)

        assert response.status_code == 400
        assert response.json() == {"error": "open reception already exists"}

    @pytest.mark.parametrize("bad_id", ["not-a-uuid", str(uuid.uuid4())])
    def test_open_reception_invalid_pvz(self, client, employee_headers, bad_id):
        response = open_reception(client, employee_headers, bad_id)

        assert response.status_code == 400
        assert response.json() == {"error": "invalid pvz id"}

    def test_close_twice(self, client, employee_headers, pvz_id):
        opened = open_reception(client, employee_headers, pvz_id).json()

        first = close_last_reception(client, employee_headers, pvz_id)
        second = close_last_reception(client, employee_headers, pvz_id)

        assert first.status_code == 200
        assert first.json()["id"] == opened["id"]
        assert first.json()["status"] == STATUS_CLOSED
        assert second.status_code == 400
        assert second.json() == {"error": "no open reception exists"}

    def test_close_unknown_pvz(self, client, employee_headers):
        response = close_last_reception(client, employee_headers, uuid.uuid4())

        assert response.status_code == 400
        assert response.json() == {"error": "invalid pvz id"}

    def test_add_product_without_reception(self, client, employee_headers, pvz_id):
        response = add_product(client, employee_headers, pvz_id)

        assert response.status_code == 400
        assert response.json() == {"error": "no open reception exists"}

    def test_add_product_invalid_type(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)

        response = add_product(client, employee_headers, pvz_id, "мебель")

        assert response.status_code == 400
        assert response.json() == {"error": "invalid product type"}

    def test_add_product_after_close(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)
        close_last_reception(client, employee_headers, pvz_id)

        response = add_product(client, employee_headers, pvz_id)

        assert response.status_code == 400
        assert response.json() == {"error": "no open reception exists"}

    def test_delete_from_empty_reception(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)

        response = delete_last_product(client, employee_headers, pvz_id)

        assert response.status_code == 400
        assert response.json() == {"error": "no products in open reception"}

    def test_full_cycle(self, client, employee_headers, pvz_id):
        reception = open_reception(client, employee_headers, pvz_id).json()
        first = add_product(client, employee_headers, pvz_id, PRODUCT_TYPE_ELECTRONICS)
        second = add_product(client, employee_headers, pvz_id, PRODUCT_TYPE_CLOTHES)

        deleted = delete_last_product(client, employee_headers, pvz_id)
        closed = close_last_reception(client, employee_headers, pvz_id)
        listing = list_pvz(client, employee_headers).json()

        assert first.status_code == second.status_code == 201
        assert first.json()["receptionId"] == reception["id"]
        assert deleted.status_code == 200
        assert second.json()["id"] in deleted.json()["message"]
        assert closed.status_code == 200

        pvz = next(item for item in listing["pvzs"] if item["id"] == pvz_id)
        assert len(pvz["receptions"]) == 1
        listed = pvz["receptions"][0]
        assert listed["id"] == reception["id"]
        assert listed["status"] == STATUS_CLOSED
        assert [p["id"] for p in listed["products"]] == [first.json()["id"]]
        assert listed["products"][0]["type"] == PRODUCT_TYPE_ELECTRONICS
        assert listed["products"][0]["receptionId"] == reception["id"]

    def test_delete_n_plus_one(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)
        for _ in range(3):
            add_product(client, employee_headers, pvz_id)

        statuses = [delete_last_product(client, employee_headers, pvz_id).status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 400]


class TestListing:

    def test_products_newest_first(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)
        ids = [add_product(client, employee_headers, pvz_id).json()["id"] for _ in range(3)]

        pvz = list_pvz(client, employee_headers).json()["pvzs"][0]

        assert [p["id"] for p in pvz["receptions"][0]["products"]] == list(reversed(ids))

    def test_coerced_pagination_matches_defaults(self, client, employee_headers, moderator_headers):
        for _ in range(32):
            client.post(f"{API}/pvz", json={"city": CITY_MOSCOW}, headers=moderator_headers)

        coerced = list_pvz(client, employee_headers, page=0, limit=0)
        defaults = list_pvz(client, employee_headers, page=1, limit=30)

        assert coerced.status_code == 200
        assert len(coerced.json()["pvzs"]) == 30
        assert coerced.json() == defaults.json()

    def test_date_range_without_matches_keeps_pvz(self, client, employee_headers, pvz_id):
        open_reception(client, employee_headers, pvz_id)

        response = list_pvz(client, employee_headers, startDate="2099-01-01T00:00:00Z")

        assert response.status_code == 200
        pvz = response.json()["pvzs"][0]
        assert pvz["id"] == pvz_id
        assert pvz["receptions"] == []

    def test_date_range_includes_current_reception(self, client, employee_headers, pvz_id):
        reception = open_reception(client, employee_headers, pvz_id).json()

        response = list_pvz(
            client,
            employee_headers,
            startDate="2000-01-01T00:00:00Z",
            endDate="2099-01-01T00:00:00Z",
        )

        assert [r["id"] for r in response.json()["pvzs"][0]["receptions"]] == [reception["id"]]

    @pytest.mark.parametrize("params", [
        {"startDate": "yesterday"},
        {"startDate": "0"},
        {"startDate": "2025-04-01"},
        {"endDate": "2025-04-01T12:00:00"},
        {"endDate": "2025-13-45"},
        {"page": "first"},
        {"limit": "many"},
    ])
    def test_invalid_query(self, client, employee_headers, params):
        response = list_pvz(client, employee_headers, **params)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_numeric_timestamp_rejected(self, client, employee_headers, pvz_id):
        response = list_pvz(client, employee_headers, startDate="0")

        assert response.status_code == 400
        assert response.json() == {"error": "invalid date format"}
