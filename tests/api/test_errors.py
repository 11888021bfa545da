"""Tests for the error envelope."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import NoResultFound

from app.api.errors import format_validation_errors
from app.infrastructure.config import Settings
from app.main import create_app

API = "/api/v1"


class TestRouteNotFound:
    """Tests for unmatched routes."""

    def test_unknown_route(self, client: TestClient) -> None:
        """Should return the route-not-found envelope."""
        response = client.get("/api/v1/shoes")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Route not found",
            "message": "The requested route /api/v1/shoes does not exist.",
        }


class TestValidationErrors:
    """Tests for request validation failures."""

    def test_malformed_number_is_400(self, client: TestClient) -> None:
        """Should reject a non-numeric price bound."""
        response = client.get(f"{API}/products", params={"minPrice": "cheap"})
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Validation error"
        assert "minPrice" in data["message"]

    def test_malformed_boolean_is_400(self, client: TestClient) -> None:
        """Should reject an unparseable inStock flag."""
        response = client.get(f"{API}/variants", params={"inStock": "maybe"})
        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_page_below_one_is_400(self, client: TestClient) -> None:
        """Should reject page numbers below one."""
        response = client.get(f"{API}/colors", params={"page": 0})
        assert response.status_code == 400

    @pytest.mark.parametrize("param", ["page", "limit"])
    def test_oversized_pagination_is_400(self, client: TestClient, param: str) -> None:
        """Should reject values too large for the database."""
        response = client.get(f"{API}/products", params={param: str(10**20)})
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation error"
        assert param in data["message"]

    def test_invalid_json_body_is_400(self, client: TestClient) -> None:
        """Should reject bodies that are not JSON."""
        response = client.post(
            f"{API}/colors",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_format_validation_errors(self) -> None:
        """Should drop the request location and join entries."""
        message = format_validation_errors(
            [
                {"loc": ("body", "name"), "msg": "Field required"},
                {"loc": ("body",), "msg": "Value error, name cannot be null"},
            ]
        )
        assert message == "name: Field required; name cannot be null"


class TestUnexpectedErrors:
    """Tests for the catch-all handler."""

    @pytest.fixture
    def failing_app(self, test_settings: Settings) -> FastAPI:
        app = create_app(test_settings)

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("database exploded")

        @app.get("/missing-record")
        async def missing_record() -> None:
            raise NoResultFound("No row was found")

        return app

    def test_message_withheld_outside_debug(self, failing_app: FastAPI) -> None:
        """Should hide the exception text when debug is off."""
        with TestClient(failing_app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Unexpected error",
            "message": "Something went wrong.",
        }

    def test_message_shown_in_debug(self, test_settings: Settings) -> None:
        """Should expose the exception text when debug is on."""
        app = create_app(test_settings.model_copy(update={"debug": True}))

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("database exploded")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "database exploded"

    def test_no_result_is_404(self, failing_app: FastAPI) -> None:
        """Should map a missing single-row result to 404."""
        with TestClient(failing_app) as client:
            response = client.get("/missing-record")

        assert response.status_code == 404
        assert response.json()["error"] == "Record not found"
