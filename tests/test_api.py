"""
API tests for the moderation endpoints.
Exercises the full request path: routing, token extraction, services and error formatting.
"""

import pytest
from fastapi.testclient import TestClient

from rental_admin.config import Settings
from rental_admin.main import create_app
from rental_admin.repositories.listing import ListingRepository
from tests.conftest import TEST_ADMIN_EMAIL, TEST_PASSWORD


def assert_error(response, status_code: int, code: str):
    assert response.status_code == status_code
    error = response.json()["error"]
    assert error["code"] == code
    assert error["message"]
    assert error["timestamp"]
    assert error["request_id"]
    return error


class TestAuthEndpoints:
    """Test login and token inspection endpoints."""

    def test_login_success(self, app, client: TestClient):
        response = client.post("/api/auth/login", json={"email": TEST_ADMIN_EMAIL, "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 3600
        assert data["expires_in"] == app.state.auth_service.token_service.expires_in
        assert data["user"] == {"id": 1, "email": TEST_ADMIN_EMAIL, "role": "admin"}

    def test_login_token_opens_protected_routes(self, client: TestClient):
        login = client.post("/api/auth/login", json={"email": TEST_ADMIN_EMAIL, "password": TEST_PASSWORD})
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        response = client.get("/api/listings", headers=headers)

        assert response.status_code == 200

    @pytest.mark.parametrize("email,password", [
        (TEST_ADMIN_EMAIL, "wrongpassword"),
        ("nobody@dashboard.com", TEST_PASSWORD),
    ])
    def test_login_failure_is_uniform(self, client: TestClient, email: str, password: str):
        response = client.post("/api/auth/login", json={"email": email, "password": password})

        error = assert_error(response, 401, "UNAUTHORIZED")
        assert error["message"] == "Invalid email or password"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_login_missing_fields(self, client: TestClient):
        response = client.post("/api/auth/login", json={"email": TEST_ADMIN_EMAIL})

        error = assert_error(response, 400, "VALIDATION_ERROR")
        assert any("password" in detail["field"] for detail in error["details"])

    def test_current_user(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == TEST_ADMIN_EMAIL

    def test_validate_token(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/auth/validate", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["user_id"] == "1"
        assert data["email"] == TEST_ADMIN_EMAIL
        assert data["expires_at"]

    def test_validate_invalid_token(self, client: TestClient):
        response = client.post("/api/auth/validate", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
        assert response.json()["valid"] is False


class TestTokenGate:
    """Every listing and audit endpoint requires a valid token."""

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/listings"),
        ("get", "/api/listings/stats"),
        ("get", "/api/listings/1"),
        ("get", "/api/audit"),
        ("get", "/api/auth/me"),
    ])
    def test_missing_token(self, client: TestClient, method: str, path: str):
        response = getattr(client, method)(path)

        error = assert_error(response, 401, "UNAUTHORIZED")
        assert error["message"] == "Authentication token required"

    def test_moderation_without_token(self, client: TestClient, listing_repository: ListingRepository):
        response = client.put("/api/listings", json={"id": 1, "action": "updateStatus", "status": "approved"})

        assert_error(response, 401, "UNAUTHORIZED")
        assert listing_repository.audit_count() == 0

    @pytest.mark.parametrize("header", ["Bearer garbage", "Bearer a.b.c"])
    def test_invalid_token(self, client: TestClient, header: str):
        response = client.get("/api/listings", headers={"Authorization": header})

        error = assert_error(response, 401, "UNAUTHORIZED")
        assert error["message"] == "Invalid or expired token"

    def test_other_auth_scheme_treated_as_missing(self, client: TestClient, admin_token: str):
        response = client.get("/api/listings", headers={"Authorization": f"Basic {admin_token}"})

        assert_error(response, 401, "UNAUTHORIZED")

    def test_token_cookie_accepted(self, client: TestClient, admin_token: str):
        client.cookies.set("token", admin_token)

        response = client.get("/api/listings")

        assert response.status_code == 200
        assert response.json()["total"] == 5

    def test_invalid_token_cookie_rejected(self, client: TestClient):
        client.cookies.set("token", "garbage")

        response = client.get("/api/listings")

        error = assert_error(response, 401, "UNAUTHORIZED")
        assert error["message"] == "Invalid or expired token"

    def test_header_takes_precedence_over_cookie(self, client: TestClient, auth_headers: dict):
        client.cookies.set("token", "garbage")

        response = client.get("/api/listings", headers=auth_headers)

        assert response.status_code == 200


class TestListingEndpoints:
    """Test listing reads."""

    def test_list_listings(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == [1, 2, 3, 4, 5]
        assert data["total"] == 5
        assert data["page"] == 1
        assert data["limit"] == 10
        assert data["total_pages"] == 1
        assert data["has_next"] is False
        assert data["has_previous"] is False

        first = data["items"][0]
        assert first["title"] == "Toyota Camry 2020"
        assert first["price"] == 50.0
        assert first["status"] == "pending"
        assert first["submitted_by"] == "user1@example.com"
        assert first["images"] == ["car1.jpg"]

    def test_filter_by_status(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", params={"status": "pending"}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == [1, 4]
        assert all(item["status"] == "pending" for item in data["items"])

    def test_filter_all(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", params={"status": "all"}, headers=auth_headers)

        assert response.json()["total"] == 5

    def test_pagination(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", params={"page": 2, "limit": 2}, headers=auth_headers)

        data = response.json()
        assert [item["id"] for item in data["items"]] == [3, 4]
        assert data["total_pages"] == 3
        assert data["has_next"] is True
        assert data["has_previous"] is True

    def test_page_past_end(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", params={"page": 10}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["items"] == []

    @pytest.mark.parametrize("params", [
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
        {"page": "abc"},
        {"status": "archived"},
    ])
    def test_invalid_query(self, client: TestClient, auth_headers: dict, params: dict):
        response = client.get("/api/listings", params=params, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] in ("BAD_REQUEST", "VALIDATION_ERROR")

    def test_get_listing(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings/2", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["title"] == "BMW X5 2021"

    def test_get_listing_not_found(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings/999", headers=auth_headers)

        error = assert_error(response, 404, "NOT_FOUND")
        assert error["message"] == "Listing not found with ID: 999"

    def test_get_listing_non_integer_id(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings/abc", headers=auth_headers)

        assert_error(response, 400, "VALIDATION_ERROR")

    def test_stats(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"total": 5, "pending": 2, "approved": 2, "rejected": 1}


class TestModerationEndpoints:
    """Test moderation actions and the audit trail."""

    def test_approve_listing(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/api/listings",
            json={"id": 1, "action": "updateStatus", "status": "approved"},
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        audit = client.get("/api/audit", headers=auth_headers).json()
        assert len(audit) == 1
        assert audit[0]["listing_id"] == 1
        assert audit[0]["action"] == 'Status changed from "pending" to "approved"'
        assert audit[0]["admin_email"] == TEST_ADMIN_EMAIL
        assert audit[0]["id"]
        assert audit[0]["timestamp"]

    def test_edit_listing(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/api/listings",
            json={"id": "1", "action": "edit", "updates": {"price": 99, "location": "Boston"}},
            headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 99.0
        assert data["location"] == "Boston"
        assert data["title"] == "Toyota Camry 2020"

        audit = client.get("/api/audit", headers=auth_headers).json()
        assert [entry["action"] for entry in audit] == ["Listing updated (price, location)"]

    def test_audit_most_recent_first(self, client: TestClient, auth_headers: dict):
        client.put("/api/listings", json={"id": 1, "action": "updateStatus", "status": "approved"}, headers=auth_headers)
        client.put("/api/listings", json={"id": 3, "action": "updateStatus", "status": "pending"}, headers=auth_headers)

        audit = client.get("/api/audit", headers=auth_headers).json()

        assert [entry["listing_id"] for entry in audit] == [3, 1]

    @pytest.mark.parametrize("body", [
        {"action": "updateStatus", "status": "approved"},
        {"id": 1, "status": "approved"},
        {"id": 1, "action": "publish"},
        {"id": 1, "action": "updateStatus"},
        {"id": 1, "action": "updateStatus", "status": "archived"},
        {"id": 1, "action": "edit"},
        {"id": 1, "action": "edit", "updates": {"status": "approved"}},
        {"id": "abc", "action": "updateStatus", "status": "approved"},
    ])
    def test_bad_moderation_request(
        self,
        client: TestClient,
        auth_headers: dict,
        listing_repository: ListingRepository,
        body: dict
    ):
        response = client.put("/api/listings", json=body, headers=auth_headers)

        assert_error(response, 400, "BAD_REQUEST")
        assert listing_repository.audit_count() == 0

    def test_edit_unknown_field_reports_details(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/api/listings",
            json={"id": 1, "action": "edit", "updates": {"color": "red"}},
            headers=auth_headers
        )

        error = assert_error(response, 400, "BAD_REQUEST")
        assert error["details"][0]["field"] == "color"

    @pytest.mark.parametrize("listing_id", [True, False])
    def test_boolean_id_rejected(
        self,
        client: TestClient,
        auth_headers: dict,
        listing_repository: ListingRepository,
        listing_id: bool
    ):
        response = client.put(
            "/api/listings",
            json={"id": listing_id, "action": "updateStatus", "status": "approved"},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert listing_repository.get_by_id(1).status.value == "pending"
        assert listing_repository.audit_count() == 0

    @pytest.mark.parametrize("price", ["1e400", "1000000.01", "Infinity", "12.345"])
    def test_edit_price_out_of_range(
        self,
        client: TestClient,
        auth_headers: dict,
        listing_repository: ListingRepository,
        price: str
    ):
        response = client.put(
            "/api/listings",
            json={"id": 1, "action": "edit", "updates": {"price": price}},
            headers=auth_headers
        )

        error = assert_error(response, 400, "BAD_REQUEST")
        assert error["details"][0]["field"] == "price"
        assert listing_repository.audit_count() == 0

        listing = client.get("/api/listings/1", headers=auth_headers).json()
        assert listing["price"] == 50.0

    def test_edit_price_at_upper_bound(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/api/listings",
            json={"id": 1, "action": "edit", "updates": {"price": "1000000"}},
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["price"] == 1000000.0

    def test_moderate_unknown_listing(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/api/listings",
            json={"id": 999, "action": "updateStatus", "status": "approved"},
            headers=auth_headers
        )

        assert_error(response, 404, "NOT_FOUND")

    def test_moderation_changes_are_visible(self, client: TestClient, auth_headers: dict):
        client.put("/api/listings", json={"id": 1, "action": "updateStatus", "status": "rejected"}, headers=auth_headers)

        stats = client.get("/api/listings/stats", headers=auth_headers).json()

        assert stats == {"total": 5, "pending": 1, "approved": 2, "rejected": 2}


class TestErrorResponses:
    """Test error body format, request IDs and the health check."""

    def test_request_id_header(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/listings", headers=auth_headers)

        assert response.headers["X-Request-ID"]
        assert "X-Processing-Time" in response.headers

    def test_request_id_propagated_to_error_body(self, client: TestClient):
        response = client.get("/api/listings", headers={"X-Request-ID": "req-1234"})

        assert response.headers["X-Request-ID"] == "req-1234"
        assert response.json()["error"]["request_id"] == "req-1234"

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/nothing-here")

        assert_error(response, 404, "HTTP_404")

    def test_method_not_allowed(self, client: TestClient, auth_headers: dict):
        response = client.delete("/api/listings", headers=auth_headers)

        assert_error(response, 405, "HTTP_405")

    def test_internal_error_hides_details(
        self,
        client: TestClient,
        auth_headers: dict,
        listing_repository: ListingRepository,
        monkeypatch
    ):
        def broken_audit_trail():
            raise RuntimeError("audit storage corrupted")

        monkeypatch.setattr(listing_repository, "audit_trail", broken_audit_trail)

        response = client.get("/api/audit", headers=auth_headers)

        error = assert_error(response, 500, "INTERNAL_SERVER_ERROR")
        assert error["message"] == "Internal server error"
        assert "corrupted" not in response.text

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["listings"] == 5
        assert data["audit_entries"] == 0


class TestApplicationFactory:
    """Each application owns its own store."""

    def test_apps_do_not_share_state(self, settings: Settings, user_repository, auth_headers: dict):
        first = create_app(settings=settings, user_repository=user_repository)
        second = create_app(settings=settings, user_repository=user_repository)

        with TestClient(first) as first_client, TestClient(second) as second_client:
            first_client.put(
                "/api/listings",
                json={"id": 1, "action": "updateStatus", "status": "approved"},
                headers=auth_headers
            )

            assert len(first_client.get("/api/audit", headers=auth_headers).json()) == 1
            assert second_client.get("/api/audit", headers=auth_headers).json() == []

    def test_unseeded_store(self, settings: Settings, user_repository, auth_headers: dict):
        app = create_app(settings=settings.model_copy(update={"seed_demo_data": False}), user_repository=user_repository)

        with TestClient(app) as client:
            response = client.get("/api/listings", headers=auth_headers)

        assert response.json()["total"] == 0
        assert response.json()["total_pages"] == 0
