"""Request dependencies for the catalog API.

Translates query strings into filter and pagination objects and hands
each endpoint a repository bound to the request's session.
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import FIT_TYPE_ERROR
from app.catalog.filters import (
    CatalogFilter,
    PaginationParams,
    ProductFilter,
    SortOrder,
    StyleFilter,
    VariantFilter,
)
from app.catalog.models import FitType
from app.catalog.repository import CatalogRepository
from app.domain.exceptions import ValidationError
from app.infrastructure.database import get_session

SessionDep = Annotated[AsyncSession, Depends(get_session)]

# Largest page or limit the database accepts as a 32-bit integer
MAX_PAGE_VALUE = 2**31 - 1


def repository_provider(
    repository_class: type[CatalogRepository],
) -> Callable[[AsyncSession], CatalogRepository]:
    """Build a dependency returning ``repository_class`` for the request session."""

    def provide(session: SessionDep) -> CatalogRepository:
        return repository_class(session)

    return provide


def pagination_provider(default_limit: int) -> Callable[..., PaginationParams]:
    """Build a pagination dependency with an entity-specific default limit.

    Args:
        default_limit: Page size used when ``limit`` is omitted.

    Returns:
        Dependency reading ``page``, ``limit``, ``sortBy`` and ``sortOrder``.
    """

    def provide(
        page: Annotated[
            int, Query(ge=1, le=MAX_PAGE_VALUE, description="Page number (1-based)")
        ] = 1,
        limit: Annotated[
            int, Query(ge=1, le=MAX_PAGE_VALUE, description="Items per page")
        ] = default_limit,
        sort_by: Annotated[str | None, Query(alias="sortBy", description="Sort field")] = None,
        sort_order: Annotated[
            SortOrder, Query(alias="sortOrder", description="Sort direction")
        ] = SortOrder.DESC,
    ) -> PaginationParams:
        return PaginationParams(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

    return provide


def search_filter(
    search: Annotated[str | None, Query(description="Case-insensitive text search")] = None,
) -> CatalogFilter:
    """Filter for entities that only support text search."""
    return CatalogFilter(search=search)


def product_filter(
    search: Annotated[str | None, Query()] = None,
    brand_id: Annotated[str | None, Query(alias="brandId")] = None,
    product_type_id: Annotated[str | None, Query(alias="productTypeId")] = None,
    in_stock: Annotated[bool | None, Query(alias="inStock")] = None,
    min_price: Annotated[float | None, Query(alias="minPrice")] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice")] = None,
) -> ProductFilter:
    """Read product filters from the query string."""
    return ProductFilter(
        search=search,
        brand_id=brand_id,
        product_type_id=product_type_id,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
    )


def variant_filter(
    search: Annotated[str | None, Query()] = None,
    product_id: Annotated[str | None, Query(alias="productId")] = None,
    color_id: Annotated[str | None, Query(alias="colorId")] = None,
    style_id: Annotated[str | None, Query(alias="styleId")] = None,
    in_stock: Annotated[bool | None, Query(alias="inStock")] = None,
) -> VariantFilter:
    """Read variant filters from the query string."""
    return VariantFilter(
        search=search,
        product_id=product_id,
        color_id=color_id,
        style_id=style_id,
        in_stock=in_stock,
    )


def style_filter(
    search: Annotated[str | None, Query()] = None,
    fit_type: Annotated[str | None, Query(alias="fitType")] = None,
) -> StyleFilter:
    """Read style filters from the query string.

    ``fitType`` is matched case-insensitively.

    Raises:
        ValidationError: If ``fitType`` is not a known fit type.
    """
    parsed = None
    if fit_type:
        name = fit_type.strip().upper()
        if name not in FitType.__members__:
            raise ValidationError(FIT_TYPE_ERROR)
        parsed = FitType(name)
    return StyleFilter(search=search, fit_type=parsed)
