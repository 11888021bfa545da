"""Tests for style API endpoints."""

from collections.abc import Callable
from typing import Any

from fastapi.testclient import TestClient

API = "/api/v1"
STYLES = f"{API}/styles"

Factory = Callable[..., dict[str, Any]]


class TestCreateStyle:
    """Tests for POST /styles endpoint."""

    def test_create_style_uppercases_fit_type(self, client: TestClient) -> None:
        """Should accept a lower-case fit type and store it upper-cased."""
        response = client.post(STYLES, json={"name": "X", "fitType": "skinny"})
        assert response.status_code == 201

        data = response.json()
        assert data["message"] == "Style created successfully"
        assert data["data"]["name"] == "X"
        assert data["data"]["fitType"] == "SKINNY"

    def test_create_style_invalid_fit_type(self, client: TestClient) -> None:
        """Should reject an unknown fit type."""
        response = client.post(STYLES, json={"name": "Wide Leg", "fitType": "WIDE"})
        assert response.status_code == 400

        data = response.json()
        assert data["error"] == "Validation error"
        assert "Invalid fit type. Must be one of: SKINNY, RELAXED, OVERSIZED, CLASSIC" in data[
            "message"
        ]

    def test_create_style_requires_fit_type(self, client: TestClient) -> None:
        """Should reject a style without a fit type."""
        response = client.post(STYLES, json={"name": "Bootcut"})
        assert response.status_code == 400

    def test_create_style_duplicate_name(self, client: TestClient, make_style: Factory) -> None:
        """Should reject a second style with the same name."""
        make_style(name="Slim")

        response = client.post(STYLES, json={"name": "Slim", "fitType": "RELAXED"})
        assert response.status_code == 400
        assert response.json()["message"] == "Style name already exists"


class TestListStyles:
    """Tests for GET /styles endpoint."""

    def test_filter_by_fit_type(self, client: TestClient, make_style: Factory) -> None:
        """Should filter on fit type case-insensitively."""
        make_style(name="Skinny Jean", fitType="SKINNY")
        make_style(name="Loose Tee", fitType="RELAXED")
        make_style(name="Drainpipe", fitType="SKINNY")

        response = client.get(STYLES, params={"fitType": "skinny"})
        assert response.status_code == 200

        data = response.json()
        assert data["pagination"]["total"] == 2
        assert [s["name"] for s in data["data"]] == ["Drainpipe", "Skinny Jean"]

    def test_filter_by_unknown_fit_type(self, client: TestClient) -> None:
        """Should reject an unknown fit type filter."""
        response = client.get(STYLES, params={"fitType": "baggy"})
        assert response.status_code == 400

    def test_list_styles_variant_count(
        self, client: TestClient, make_style: Factory, make_variant: Factory
    ) -> None:
        """Should report how many variants use each style."""
        style = make_style()
        make_variant(styleId=style["id"])

        data = client.get(STYLES).json()["data"]
        assert data[0]["variantCount"] == 1


class TestFitTypes:
    """Tests for GET /styles/fit-types endpoint."""

    def test_list_fit_types(self, client: TestClient) -> None:
        """Should return the fixed fit types."""
        response = client.get(f"{STYLES}/fit-types")
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": ["SKINNY", "RELAXED", "OVERSIZED", "CLASSIC"],
        }


class TestGetStyle:
    """Tests for GET /styles/{id} endpoint."""

    def test_get_style_with_variants(
        self, client: TestClient, make_style: Factory, make_variant: Factory
    ) -> None:
        """Should include variants with their product."""
        style = make_style()
        variant = make_variant(styleId=style["id"])

        data = client.get(f"{STYLES}/{style['id']}").json()["data"]
        assert data["variants"][0]["id"] == variant["id"]
        assert data["variants"][0]["product"]["id"] == variant["productId"]

    def test_get_style_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.get(f"{STYLES}/does-not-exist")
        assert response.status_code == 404
        assert response.json()["message"] == "Style not found"


class TestUpdateStyle:
    """Tests for PUT /styles/{id} endpoint."""

    def test_update_fit_type(self, client: TestClient, make_style: Factory) -> None:
        """Should update and upper-case the fit type."""
        style = make_style(name="Chino", fitType="CLASSIC")

        response = client.put(f"{STYLES}/{style['id']}", json={"fitType": "oversized"})
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["fitType"] == "OVERSIZED"
        assert data["name"] == "Chino"

    def test_update_invalid_fit_type(self, client: TestClient, make_style: Factory) -> None:
        """Should reject an unknown fit type."""
        style = make_style()

        response = client.put(f"{STYLES}/{style['id']}", json={"fitType": "WIDE"})
        assert response.status_code == 400


class TestDeleteStyle:
    """Tests for DELETE /styles/{id} endpoint."""

    def test_delete_style_in_use(
        self, client: TestClient, make_style: Factory, make_variant: Factory
    ) -> None:
        """Should refuse while a variant uses the style."""
        style = make_style()
        make_variant(styleId=style["id"])

        response = client.delete(f"{STYLES}/{style['id']}")
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete style that is used by product variants"

    def test_delete_style(self, client: TestClient, make_style: Factory) -> None:
        """Should delete an unused style."""
        style = make_style()

        response = client.delete(f"{STYLES}/{style['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == "Style deleted successfully"


class TestBulkCreateStyles:
    """Tests for POST /styles/bulk endpoint."""

    def test_bulk_create(self, client: TestClient, make_style: Factory) -> None:
        """Should skip invalid fit types and existing names."""
        make_style(name="Regular")

        response = client.post(
            f"{STYLES}/bulk",
            json={
                "styles": [
                    {"name": "Regular", "fitType": "CLASSIC"},
                    {"name": "Baggy", "fitType": "relaxed"},
                    {"name": "Flare", "fitType": "WIDE"},
                    {"name": "Boxy"},
                ]
            },
        )
        assert response.status_code == 201

        data = response.json()
        assert data["data"]["count"] == 1
        assert data["message"] == "1 styles created successfully"

        styles = client.get(STYLES, params={"search": "Baggy"}).json()["data"]
        assert styles[0]["fitType"] == "RELAXED"

    def test_bulk_create_empty_list(self, client: TestClient) -> None:
        """Should reject an empty list."""
        response = client.post(f"{STYLES}/bulk", json={"styles": []})
        assert response.status_code == 400
        assert response.json()["message"] == "Styles array is required"

    def test_bulk_create_no_valid_entries(self, client: TestClient) -> None:
        """Should reject a batch with no valid style."""
        response = client.post(f"{STYLES}/bulk", json={"styles": [{"name": "A", "fitType": "X"}]})
        assert response.status_code == 400
        assert (
            response.json()["message"]
            == "At least one valid style with name and fitType is required"
        )
