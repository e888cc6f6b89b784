"""Unit tests for the version 1 user routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import status

from shared_kernel.mediator import Mediator, OperationCancelledError, TransientError

MISSING_ID = "01ARZ3NDEKTSV4RRFFQ69G5FAV"


class TestCreateUser:
    def test_creates_user_with_location_header(self, test_client, john_payload):
        response = test_client.post("/api/v1/users", json=john_payload)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["name"] == "John Doe"
        assert body["email"] == "john@example.com"
        assert body["type"] == "employee"
        assert body["updated_at"] is None
        assert response.headers["Location"] == f"/api/v1/users/{body['id']}"

    def test_unversioned_prefix_serves_same_routes(self, test_client, john_payload):
        response = test_client.post("/api/users", json=john_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.headers["Location"].startswith("/api/users/")

    def test_duplicate_email_returns_400(self, test_client, john_payload):
        test_client.post("/api/v1/users", json=john_payload)

        response = test_client.post(
            "/api/v1/users",
            json={**john_payload, "email": "JOHN@example.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.json()["detail"]

    def test_invalid_input_returns_422_with_every_failure(self, test_client):
        response = test_client.post(
            "/api/v1/users",
            json={"name": "", "email": "not-an-email", "type": "root"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        detail = response.json()["detail"]
        assert detail["message"] == "Validation failed"
        assert {"field": "name", "message": "Name is required"} in detail["errors"]
        assert {
            "field": "email",
            "message": "Email must be a valid email address",
        } in detail["errors"]
        assert {"field": "type", "message": "Invalid user type"} in detail["errors"]

    def test_missing_fields_are_reported_by_validation(self, test_client):
        response = test_client.post("/api/v1/users", json={})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        fields = {error["field"] for error in response.json()["detail"]["errors"]}
        assert fields == {"name", "email", "type"}


class TestGetUser:
    def test_returns_created_user(self, test_client, john_payload):
        created = test_client.post("/api/v1/users", json=john_payload).json()

        response = test_client.get(f"/api/v1/users/{created['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == created

    def test_unknown_user_returns_404(self, test_client):
        response = test_client.get(f"/api/v1/users/{MISSING_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"

    def test_malformed_id_returns_400(self, test_client):
        response = test_client.get("/api/v1/users/not-a-ulid")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid user ID format"


class TestListUsers:
    def test_empty_list(self, test_client):
        response = test_client.get("/api/v1/users")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_lists_users_oldest_first(self, test_client):
        for name in ("Ann", "Bob"):
            test_client.post(
                "/api/v1/users",
                json={"name": name, "email": f"{name}@example.com", "type": "guest"},
            )

        response = test_client.get("/api/v1/users")

        assert [user["name"] for user in response.json()] == ["Ann", "Bob"]


class TestUpdateUser:
    def test_updates_user(self, test_client, john_payload):
        created = test_client.post("/api/v1/users", json=john_payload).json()

        response = test_client.put(
            f"/api/v1/users/{created['id']}",
            json={"name": "John Smith", "email": "smith@example.com", "type": "manager"},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["name"] == "John Smith"
        assert body["type"] == "manager"
        assert body["updated_at"] is not None
        assert test_client.get(f"/api/v1/users/{created['id']}").json() == body

    def test_unknown_user_returns_404(self, test_client, john_payload):
        response = test_client.put(f"/api/v1/users/{MISSING_ID}", json=john_payload)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_email_of_another_user_returns_400(self, test_client, john_payload):
        test_client.post(
            "/api/v1/users",
            json={"name": "Jane", "email": "jane@example.com", "type": "admin"},
        )
        created = test_client.post("/api/v1/users", json=john_payload).json()

        response = test_client.put(
            f"/api/v1/users/{created['id']}",
            json={**john_payload, "email": "jane@example.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_input_returns_422(self, test_client, john_payload):
        created = test_client.post("/api/v1/users", json=john_payload).json()

        response = test_client.put(
            f"/api/v1/users/{created['id']}",
            json={**john_payload, "name": "x" * 101},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["detail"]["errors"] == [
            {"field": "name", "message": "Name must not exceed 100 characters"}
        ]

    def test_malformed_id_returns_400(self, test_client, john_payload):
        response = test_client.put("/api/v1/users/123", json=john_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteUser:
    def test_deletes_user(self, test_client, john_payload):
        created = test_client.post("/api/v1/users", json=john_payload).json()

        response = test_client.delete(f"/api/v1/users/{created['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        assert (
            test_client.get(f"/api/v1/users/{created['id']}").status_code
            == status.HTTP_404_NOT_FOUND
        )

    def test_unknown_user_returns_404(self, test_client):
        response = test_client.delete(f"/api/v1/users/{MISSING_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_id_returns_400(self, test_client):
        response = test_client.delete("/api/v1/users/nope")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestInfrastructureFailures:
    @pytest.mark.parametrize(
        ("error", "detail"),
        [
            (TransientError("store offline"), "Service temporarily unavailable, please retry"),
            (OperationCancelledError("GetAllUsersQuery"), "Request was cancelled"),
        ],
    )
    def test_maps_to_503(self, client_factory, error, detail):
        mediator = AsyncMock(spec=Mediator)
        mediator.send.side_effect = error

        response = client_factory(mediator).get("/api/v1/users")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["detail"] == detail

    def test_unexpected_error_returns_500_without_internals(self, client_factory):
        mediator = AsyncMock(spec=Mediator)
        mediator.send.side_effect = RuntimeError("connection string leaked")

        response = client_factory(mediator).get("/api/v1/users")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to list users"
