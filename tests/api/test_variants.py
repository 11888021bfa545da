"""Tests for variant API endpoints."""

from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

API = "/api/v1"
VARIANTS = f"{API}/variants"

Factory = Callable[..., dict[str, Any]]


class TestCreateVariant:
    """Tests for POST /variants endpoint."""

    def test_create_variant_success(
        self,
        client: TestClient,
        make_product: Factory,
        make_color: Factory,
        make_style: Factory,
        make_collection: Factory,
    ) -> None:
        """Should create a variant with its references expanded."""
        product = make_product()
        color = make_color()
        style = make_style()
        collection = make_collection()

        response = client.post(
            VARIANTS,
            json={
                "variantId": "ext-1",
                "sku": "V-1",
                "fullVariantName": "Shirt / Red / M",
                "variantName": "Red / M",
                "productId": product["id"],
                "colorId": color["id"],
                "styleId": style["id"],
                "choices": {"Size": "M"},
                "stock": 7,
                "collectionIds": [collection["id"]],
            },
        )
        assert response.status_code == 201

        body = response.json()
        assert body["message"] == "Variant created successfully"
        data = body["data"]
        assert data["stock"] == 7
        assert data["managedVariant"] is True
        assert data["choices"] == {"Size": "M"}
        assert data["product"] == {
            "id": product["id"],
            "name": product["name"],
            "slug": product["slug"],
        }
        assert data["color"]["id"] == color["id"]
        assert data["style"]["id"] == style["id"]
        assert data["collections"][0]["id"] == collection["id"]

    def test_create_variant_unknown_product(self, client: TestClient) -> None:
        """Should return 404 when the owning product is missing."""
        response = client.post(
            VARIANTS,
            json={
                "variantId": "ext-2",
                "sku": "V-2",
                "fullVariantName": "X",
                "variantName": "X",
                "productId": "missing",
            },
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    def test_create_variant_unknown_color(self, client: TestClient, make_product: Factory) -> None:
        """Should reject a color that does not exist."""
        response = client.post(
            VARIANTS,
            json={
                "variantId": "ext-3",
                "sku": "V-3",
                "fullVariantName": "X",
                "variantName": "X",
                "productId": make_product()["id"],
                "colorId": "missing",
            },
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Color not found: missing"

    def test_create_variant_duplicate(self, client: TestClient, make_variant: Factory) -> None:
        """Should reject a duplicate variantId."""
        existing = make_variant()

        response = client.post(
            VARIANTS,
            json={
                "variantId": existing["variantId"],
                "sku": "UNIQUE-SKU",
                "fullVariantName": "X",
                "variantName": "X",
                "productId": existing["productId"],
            },
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Variant with this variantId or SKU already exists"


class TestListVariants:
    """Tests for GET /variants endpoint."""

    def test_filter_in_stock(self, client: TestClient, make_variant: Factory) -> None:
        """Should derive availability from the stock count."""
        stocked = make_variant(stock=3)
        empty = make_variant(stock=0)

        in_stock = client.get(VARIANTS, params={"inStock": "true"}).json()["data"]
        assert [v["id"] for v in in_stock] == [stocked["id"]]

        out_of_stock = client.get(VARIANTS, params={"inStock": "false"}).json()["data"]
        assert [v["id"] for v in out_of_stock] == [empty["id"]]

    def test_filter_by_product(
        self, client: TestClient, make_product: Factory, make_variant: Factory
    ) -> None:
        """Should filter by owning product."""
        product = make_product()
        make_variant(productId=product["id"])
        make_variant()

        data = client.get(VARIANTS, params={"productId": product["id"]}).json()
        assert data["pagination"]["total"] == 1
        assert data["data"][0]["product"]["id"] == product["id"]
        assert set(data["data"][0]["product"]) == {"id", "name", "slug", "price", "currency"}

    def test_sort_by_stock(self, client: TestClient, make_variant: Factory) -> None:
        """Should sort by stock."""
        for stock in (5, 1, 3):
            make_variant(stock=stock)

        data = client.get(VARIANTS, params={"sortBy": "stock", "sortOrder": "asc"}).json()
        assert [v["stock"] for v in data["data"]] == [1, 3, 5]


class TestProductVariants:
    """Tests for GET /variants/product/{productId} endpoint."""

    def test_list_for_product(
        self, client: TestClient, make_product: Factory, make_variant: Factory, make_color: Factory
    ) -> None:
        """Should list a product's variants by name, optionally by color."""
        product = make_product()
        red = make_color(name="Red")
        make_variant(productId=product["id"], variantName="Medium", colorId=red["id"])
        make_variant(productId=product["id"], variantName="Large")
        make_variant()

        response = client.get(f"{VARIANTS}/product/{product['id']}")
        assert response.status_code == 200

        data = response.json()
        assert [v["variantName"] for v in data["data"]] == ["Large", "Medium"]
        assert "pagination" not in data

        filtered = client.get(
            f"{VARIANTS}/product/{product['id']}", params={"colorId": red["id"]}
        ).json()
        assert [v["variantName"] for v in filtered["data"]] == ["Medium"]

    def test_list_for_unknown_product(self, client: TestClient) -> None:
        """Should return an empty list."""
        response = client.get(f"{VARIANTS}/product/missing")
        assert response.status_code == 200
        assert response.json()["data"] == []


class TestGetVariant:
    """Tests for GET /variants/{id} endpoint."""

    def test_get_variant(self, client: TestClient, make_variant: Factory) -> None:
        """Should expand the full product."""
        variant = make_variant()

        data = client.get(f"{VARIANTS}/{variant['id']}").json()["data"]
        assert data["product"]["id"] == variant["productId"]
        assert "formattedPrice" in data["product"]

    def test_get_variant_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.get(f"{VARIANTS}/nope")
        assert response.status_code == 404
        assert response.json()["message"] == "Variant not found"


class TestUpdateVariant:
    """Tests for PUT /variants/{id} endpoint."""

    def test_update_variant(self, client: TestClient, make_variant: Factory) -> None:
        """Should update supplied fields only."""
        variant = make_variant(stock=2)

        response = client.put(f"{VARIANTS}/{variant['id']}", json={"variantName": "Renamed"})
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["variantName"] == "Renamed"
        assert data["stock"] == 2
        assert response.json()["message"] == "Variant updated successfully"

    def test_update_clears_collections(
        self, client: TestClient, make_variant: Factory, make_collection: Factory
    ) -> None:
        """Should leave zero associations after an empty collection list."""
        collection = make_collection()
        variant = make_variant(collectionIds=[collection["id"]])

        response = client.put(f"{VARIANTS}/{variant['id']}", json={"collectionIds": []})
        assert response.json()["data"]["collections"] == []

        detail = client.get(f"{API}/collections/{collection['id']}").json()["data"]
        assert detail["variantCount"] == 0


class TestUpdateStock:
    """Tests for PATCH /variants/{id}/stock endpoint."""

    @pytest.mark.parametrize(
        ("start", "amount", "operation", "expected"),
        [
            (3, 5, "subtract", 0),
            (10, 4, "subtract", 6),
            (3, 5, "add", 8),
            (3, 5, "set", 5),
        ],
    )
    def test_stock_operations(
        self,
        client: TestClient,
        make_variant: Factory,
        start: int,
        amount: int,
        operation: str,
        expected: int,
    ) -> None:
        """Should add, subtract with a floor of zero, or overwrite."""
        variant = make_variant(stock=start)

        response = client.patch(
            f"{VARIANTS}/{variant['id']}/stock",
            json={"stock": amount, "operation": operation},
        )
        assert response.status_code == 200

        body = response.json()
        assert body["message"] == "Variant stock updated successfully"
        assert body["data"]["stock"] == expected
        assert "collections" not in body["data"]

    def test_default_operation_is_set(self, client: TestClient, make_variant: Factory) -> None:
        """Should overwrite when no operation is given."""
        variant = make_variant(stock=9)

        response = client.patch(f"{VARIANTS}/{variant['id']}/stock", json={"stock": 2})
        assert response.json()["data"]["stock"] == 2

    def test_stock_required(self, client: TestClient, make_variant: Factory) -> None:
        """Should require a stock value."""
        variant = make_variant()

        response = client.patch(f"{VARIANTS}/{variant['id']}/stock", json={"operation": "add"})
        assert response.status_code == 400
        assert response.json()["message"] == "Stock value is required"

    def test_stock_not_found(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.patch(f"{VARIANTS}/nope/stock", json={"stock": 1})
        assert response.status_code == 404


class TestDeleteVariant:
    """Tests for DELETE /variants/{id} endpoint."""

    def test_delete_variant(self, client: TestClient, make_variant: Factory) -> None:
        """Should delete unconditionally."""
        variant = make_variant()

        response = client.delete(f"{VARIANTS}/{variant['id']}")
        assert response.status_code == 200
        assert response.json()["message"] == "Variant deleted successfully"
        assert client.get(f"{VARIANTS}/{variant['id']}").status_code == 404
