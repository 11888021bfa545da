"""Catalog domain: models, filters, eager-load plans and repositories."""

from app.catalog.filters import (
    CatalogFilter,
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    SortOrder,
    StyleFilter,
    VariantFilter,
)
from app.catalog.models import (
    Brand,
    Collection,
    Color,
    FitType,
    Product,
    ProductType,
    ProductVariant,
    StockOperation,
    Style,
)
from app.catalog.repository import (
    BrandRepository,
    CatalogRepository,
    CollectionRepository,
    ColorRepository,
    ProductRepository,
    StyleRepository,
    VariantRepository,
)

__all__ = [
    # Models
    "Brand",
    "Collection",
    "Color",
    "FitType",
    "Product",
    "ProductType",
    "ProductVariant",
    "StockOperation",
    "Style",
    # Filters
    "CatalogFilter",
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
    "SortOrder",
    "StyleFilter",
    "VariantFilter",
    # Repositories
    "BrandRepository",
    "CatalogRepository",
    "CollectionRepository",
    "ColorRepository",
    "ProductRepository",
    "StyleRepository",
    "VariantRepository",
]
