"""Filter, pagination and sort parameters for catalog listings.

Filters translate query parameters into SQLAlchemy conditions. The
searchable columns are supplied by the repository so the same filter
classes serve every entity.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from app.catalog.models import FitType, Product, ProductVariant, Style

T = TypeVar("T")


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


def search_condition(columns: Sequence[Any], term: str) -> ColumnElement[bool]:
    """Build a case-insensitive substring match across columns.

    Args:
        columns: Text columns to search.
        term: Substring to look for.

    Returns:
        OR of ``ILIKE '%term%'`` over every column.
    """
    pattern = f"%{term}%"
    return or_(*(column.ilike(pattern) for column in columns))


@dataclass
class CatalogFilter:
    """Filter shared by every entity listing.

    Attributes:
        search: Text search across the entity's searchable columns.
    """

    search: str | None = None

    def conditions(self, search_columns: Sequence[Any] = ()) -> list[ColumnElement[bool]]:
        """Build the WHERE conditions for this filter.

        Args:
            search_columns: Columns the ``search`` term applies to.

        Returns:
            Conditions to AND together; empty when nothing is filtered.
        """
        conditions: list[ColumnElement[bool]] = []
        if self.search and search_columns:
            conditions.append(search_condition(search_columns, self.search))
        conditions.extend(self.extra_conditions())
        return conditions

    def extra_conditions(self) -> list[ColumnElement[bool]]:
        """Entity-specific conditions."""
        return []


@dataclass
class ProductFilter(CatalogFilter):
    """Filter parameters for product search.

    Attributes:
        brand_id: Filter by brand.
        product_type_id: Filter by product type.
        in_stock: Filter by the stored availability flag.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
    """

    brand_id: str | None = None
    product_type_id: str | None = None
    in_stock: bool | None = None
    min_price: float | None = None
    max_price: float | None = None

    def extra_conditions(self) -> list[ColumnElement[bool]]:
        conditions = []

        if self.brand_id is not None:
            conditions.append(Product.brand_id == self.brand_id)

        if self.product_type_id is not None:
            conditions.append(Product.product_type_id == self.product_type_id)

        if self.in_stock is not None:
            conditions.append(Product.in_stock == self.in_stock)

        if self.min_price is not None:
            conditions.append(Product.price >= self.min_price)

        if self.max_price is not None:
            conditions.append(Product.price <= self.max_price)

        return conditions


@dataclass
class VariantFilter(CatalogFilter):
    """Filter parameters for variant search.

    ``in_stock`` is derived from the stock count rather than stored.
    """

    product_id: str | None = None
    color_id: str | None = None
    style_id: str | None = None
    in_stock: bool | None = None

    def extra_conditions(self) -> list[ColumnElement[bool]]:
        conditions = []

        if self.product_id is not None:
            conditions.append(ProductVariant.product_id == self.product_id)

        if self.color_id is not None:
            conditions.append(ProductVariant.color_id == self.color_id)

        if self.style_id is not None:
            conditions.append(ProductVariant.style_id == self.style_id)

        if self.in_stock is True:
            conditions.append(ProductVariant.stock > 0)
        elif self.in_stock is False:
            conditions.append(ProductVariant.stock <= 0)

        return conditions


@dataclass
class StyleFilter(CatalogFilter):
    """Filter parameters for style search."""

    fit_type: FitType | None = None

    def extra_conditions(self) -> list[ColumnElement[bool]]:
        if self.fit_type is None:
            return []
        return [Style.fit_type == self.fit_type]


@dataclass
class PaginationParams:
    """Pagination and sort parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        sort_by: Sort field name as exposed by the API; ``None`` uses the
            entity's default ordering.
        sort_order: Sort direction.
    """

    page: int = 1
    limit: int = 20
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on the requested page.
        total: Count of the full filtered set.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.limit)
