"""Shared fixtures for API tests.

The ``make_*`` fixtures create rows through the API and return the
``data`` payload of the create response.
"""

from collections.abc import Callable
from typing import Any
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

API = "/api/v1"

Factory = Callable[..., dict[str, Any]]


def _suffix() -> str:
    return uuid4().hex[:8]


def _create(client: TestClient, resource: str, payload: dict[str, Any]) -> dict[str, Any]:
    response = client.post(f"{API}/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def make_color(client: TestClient) -> Factory:
    """Create colors."""

    def make(**fields: Any) -> dict[str, Any]:
        payload = {"name": f"Color {_suffix()}", **fields}
        return _create(client, "colors", payload)

    return make


@pytest.fixture
def make_style(client: TestClient) -> Factory:
    """Create styles."""

    def make(**fields: Any) -> dict[str, Any]:
        payload = {"name": f"Style {_suffix()}", "fitType": "CLASSIC", **fields}
        return _create(client, "styles", payload)

    return make


@pytest.fixture
def make_brand(client: TestClient) -> Factory:
    """Create brands."""

    def make(**fields: Any) -> dict[str, Any]:
        payload = {"name": f"Brand {_suffix()}", **fields}
        return _create(client, "brands", payload)

    return make


@pytest.fixture
def make_collection(client: TestClient) -> Factory:
    """Create collections."""

    def make(**fields: Any) -> dict[str, Any]:
        payload = {"name": f"Collection {_suffix()}", **fields}
        return _create(client, "collections", payload)

    return make


@pytest.fixture
def make_product(client: TestClient) -> Factory:
    """Create products."""

    def make(**fields: Any) -> dict[str, Any]:
        suffix = _suffix()
        payload = {
            "name": f"Product {suffix}",
            "slug": f"product-{suffix}",
            "sku": f"SKU-{suffix}",
            "price": 49.99,
            **fields,
        }
        return _create(client, "products", payload)

    return make


@pytest.fixture
def make_variant(client: TestClient, make_product: Factory) -> Factory:
    """Create variants; a product is created when none is given."""

    def make(**fields: Any) -> dict[str, Any]:
        suffix = _suffix()
        if "productId" not in fields:
            fields["productId"] = make_product()["id"]
        payload = {
            "variantId": f"var-{suffix}",
            "sku": f"VSKU-{suffix}",
            "fullVariantName": f"Product / Variant {suffix}",
            "variantName": f"Variant {suffix}",
            **fields,
        }
        return _create(client, "variants", payload)

    return make
