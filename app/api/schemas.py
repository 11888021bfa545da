"""API schemas for the catalog API.

Pydantic models for request validation and response serialization.
Fields are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.catalog.models import FitType, StockOperation

DataT = TypeVar("DataT")

FIT_TYPE_ERROR = "Invalid fit type. Must be one of: " + ", ".join(f.value for f in FitType)


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute access."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


# ============================================================================
# Envelope Schemas
# ============================================================================


class Pagination(BaseModel):
    """Pagination block on list responses."""

    page: int = Field(..., description="Current page number (1-based)")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of matching items")
    pages: int = Field(..., description="Total number of pages")


class ApiResponse(BaseModel, Generic[DataT]):
    """Standard success envelope.

    ``pagination`` and ``message`` are only emitted when set.
    """

    success: bool = Field(default=True, description="Always true on success")
    data: DataT | None = Field(default=None, description="Response payload")
    pagination: Pagination | None = Field(default=None, description="List pagination")
    message: str | None = Field(default=None, description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    success: bool = Field(default=False, description="Always false on error")
    error: str = Field(..., description="Short error category")
    message: str = Field(..., description="Human-readable error detail")


class BulkResult(BaseModel):
    """Outcome of a bulk create."""

    count: int = Field(..., description="Number of rows inserted")


# ============================================================================
# Request Base Classes
# ============================================================================


class UpdateModel(CamelModel):
    """Partial update body.

    Fields listed in ``non_nullable`` may be omitted but not set to null.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_nulls(self) -> "UpdateModel":
        for name in self.model_fields_set & self.non_nullable:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _normalize_fit_type(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip().upper()
        if value not in FitType.__members__:
            raise ValueError(FIT_TYPE_ERROR)
    return value


# ============================================================================
# Summary Schemas
# ============================================================================


class BrandSummary(CamelModel):
    """Brand reference."""

    id: str
    name: str


class ProductTypeSummary(CamelModel):
    """Product type reference."""

    id: str
    name: str


class CollectionSummary(CamelModel):
    """Collection reference."""

    id: str
    name: str


class ProductSummary(CamelModel):
    """Product reference."""

    id: str
    name: str
    slug: str


class ProductPriceSummary(ProductSummary):
    """Product reference with its price."""

    price: float
    currency: str


class BrandProductSummary(ProductPriceSummary):
    """Product as listed on a brand."""

    main_media: str | None = None


# ============================================================================
# Entity Schemas
# ============================================================================


class BrandRead(CamelModel):
    """Brand fields."""

    id: str
    name: str
    logo: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductTypeRead(CamelModel):
    """Product type fields."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class ColorRead(CamelModel):
    """Color fields."""

    id: str
    name: str
    hex_code: str | None = None
    created_at: datetime
    updated_at: datetime


class StyleRead(CamelModel):
    """Style fields."""

    id: str
    name: str
    fit_type: FitType
    created_at: datetime
    updated_at: datetime


class CollectionRead(CamelModel):
    """Collection fields."""

    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductRead(CamelModel):
    """Product fields."""

    id: str
    name: str
    slug: str
    sku: str
    description: str | None = None
    price: float
    discounted_price: float | None = None
    formatted_price: str | None = None
    formatted_discounted_price: str | None = None
    price_per_unit: float | None = None
    formatted_price_per_unit: str | None = None
    currency: str
    quantity_in_stock: int
    in_stock: bool
    weight: float | None = None
    track_inventory: bool
    manage_variants: bool
    product_page_url: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    main_media: str | None = None
    media_items: Any | None = None
    additional_info_sections: Any | None = None
    custom_text_fields: Any | None = None
    product_options: Any | None = None
    ribbons: Any | None = None
    discount: Any | None = None
    brand_id: str | None = None
    product_type_id: str | None = None
    created_at: datetime
    updated_at: datetime


class VariantRead(CamelModel):
    """Variant fields."""

    id: str
    variant_id: str
    sku: str
    full_variant_name: str
    variant_name: str
    choices: Any | None = None
    stock: int
    managed_variant: bool
    variant_media: Any | None = None
    product_id: str
    color_id: str | None = None
    style_id: str | None = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Expanded Schemas
# ============================================================================


class VariantWithOptions(VariantRead):
    """Variant with its color and style."""

    color: ColorRead | None = None
    style: StyleRead | None = None


class VariantWithOptionsAndCollections(VariantWithOptions):
    """Variant with color, style and full collections."""

    collections: list[CollectionRead] = []


class VariantWithProduct(VariantRead):
    """Variant with its owning product."""

    product: ProductSummary


class VariantWithRefs(VariantWithOptions):
    """Variant with product reference, color and style."""

    product: ProductSummary


class ProductWithTaxonomy(ProductRead):
    """Product with its brand and product type."""

    brand: BrandRead | None = None
    product_type: ProductTypeRead | None = None


# Products


class ProductListItem(ProductRead):
    """Product as listed."""

    brand: BrandSummary | None = None
    product_type: ProductTypeSummary | None = None
    variants: list[VariantWithOptions] = []
    collections: list[CollectionSummary] = []
    variant_count: int = 0


class ProductDetail(ProductWithTaxonomy):
    """Product with every relation expanded."""

    variants: list[VariantWithOptionsAndCollections] = []
    collections: list[CollectionRead] = []


class ProductWriteResult(ProductWithTaxonomy):
    """Product returned from create and update."""

    collections: list[CollectionRead] = []


# Variants


class VariantListItem(VariantWithOptions):
    """Variant as listed."""

    product: ProductPriceSummary
    collections: list[CollectionSummary] = []


class VariantDetail(VariantWithOptions):
    """Variant with every relation expanded."""

    product: ProductRead
    collections: list[CollectionRead] = []


class VariantForProduct(VariantWithOptions):
    """Variant as listed under its product."""

    collections: list[CollectionSummary] = []


class VariantWriteResult(VariantWithOptions):
    """Variant returned from create and update."""

    product: ProductSummary
    collections: list[CollectionRead] = []


class VariantStockResult(VariantWithOptions):
    """Variant returned from a stock change."""

    product: ProductSummary


# Colors


class ColorListItem(ColorRead):
    """Color with usage count."""

    variant_count: int = 0


class ColorDetail(ColorListItem):
    """Color with the variants that use it."""

    variants: list[VariantWithProduct] = []


# Styles


class StyleListItem(StyleRead):
    """Style with usage count."""

    variant_count: int = 0


class StyleDetail(StyleListItem):
    """Style with the variants that use it."""

    variants: list[VariantWithProduct] = []


# Brands


class BrandListItem(BrandRead):
    """Brand with product count."""

    product_count: int = 0


class BrandDetail(BrandListItem):
    """Brand with its products."""

    products: list[BrandProductSummary] = []


# Collections


class CollectionListItem(CollectionRead):
    """Collection with membership counts."""

    product_count: int = 0
    variant_count: int = 0


class CollectionDetail(CollectionListItem):
    """Collection with its products and variants."""

    products: list[ProductWithTaxonomy] = []
    variants: list[VariantWithRefs] = []


# ============================================================================
# Request Schemas
# ============================================================================


class ColorCreate(CamelModel):
    """Request to create a color."""

    name: str = Field(..., min_length=1, max_length=100, description="Color name")
    hex_code: str | None = Field(default=None, max_length=20, description="Hex code")

    @field_validator("hex_code", mode="before")
    @classmethod
    def blank_hex_code(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ColorUpdate(UpdateModel):
    """Request to update a color."""

    non_nullable = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    hex_code: str | None = Field(default=None, max_length=20)

    @field_validator("hex_code", mode="before")
    @classmethod
    def blank_hex_code(cls, value: Any) -> Any:
        return _blank_to_none(value)


class ColorBulkEntry(CamelModel):
    """One color in a bulk request; incomplete entries are skipped."""

    name: str | None = None
    hex_code: str | None = None


class ColorBulkCreate(CamelModel):
    """Request to create many colors."""

    colors: list[ColorBulkEntry] = Field(..., description="Colors to create")


class StyleCreate(CamelModel):
    """Request to create a style."""

    name: str = Field(..., min_length=1, max_length=100, description="Style name")
    fit_type: FitType = Field(..., description="Fit type (case-insensitive)")

    @field_validator("fit_type", mode="before")
    @classmethod
    def normalize_fit_type(cls, value: Any) -> Any:
        return _normalize_fit_type(value)


class StyleUpdate(UpdateModel):
    """Request to update a style."""

    non_nullable = frozenset({"name", "fit_type"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    fit_type: FitType | None = None

    @field_validator("fit_type", mode="before")
    @classmethod
    def normalize_fit_type(cls, value: Any) -> Any:
        return _normalize_fit_type(value)


class StyleBulkEntry(CamelModel):
    """One style in a bulk request; incomplete or invalid entries are skipped."""

    name: str | None = None
    fit_type: str | None = None


class StyleBulkCreate(CamelModel):
    """Request to create many styles."""

    styles: list[StyleBulkEntry] = Field(..., description="Styles to create")


class BrandCreate(CamelModel):
    """Request to create a brand."""

    name: str = Field(..., min_length=1, max_length=200, description="Brand name")
    logo: str | None = Field(default=None, max_length=1000, description="Logo URL")


class BrandUpdate(UpdateModel):
    """Request to update a brand."""

    non_nullable = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1, max_length=200)
    logo: str | None = Field(default=None, max_length=1000)


class CollectionCreate(CamelModel):
    """Request to create a collection."""

    name: str = Field(..., min_length=1, max_length=200, description="Collection name")
    description: str | None = Field(default=None, description="Collection description")


class CollectionUpdate(UpdateModel):
    """Request to update a collection."""

    non_nullable = frozenset({"name"})

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None


class ProductFields(CamelModel):
    """Optional product fields shared by create and update."""

    description: str | None = None
    discounted_price: float | None = Field(default=None, ge=0)
    price_per_unit: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)
    product_page_url: str | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    main_media: str | None = None
    media_items: Any | None = None
    additional_info_sections: Any | None = None
    custom_text_fields: Any | None = None
    product_options: Any | None = None
    ribbons: Any | None = None
    discount: Any | None = None
    brand_id: str | None = None
    product_type_id: str | None = None


class ProductCreate(ProductFields):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=500, description="Product name")
    slug: str = Field(..., min_length=1, max_length=500, description="URL slug (unique)")
    sku: str = Field(..., min_length=1, max_length=100, description="SKU (unique)")
    price: float = Field(..., gt=0, description="Price in major currency units")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    quantity_in_stock: int = Field(default=0, ge=0)
    in_stock: bool = True
    track_inventory: bool = True
    manage_variants: bool = False
    collection_ids: list[str] = Field(default_factory=list, description="Collections to join")


class ProductUpdate(ProductFields, UpdateModel):
    """Request to update a product.

    ``collectionIds`` replaces the whole collection set when present.
    """

    non_nullable = frozenset(
        {
            "name",
            "slug",
            "sku",
            "price",
            "currency",
            "quantity_in_stock",
            "in_stock",
            "track_inventory",
            "manage_variants",
        }
    )

    name: str | None = Field(default=None, min_length=1, max_length=500)
    slug: str | None = Field(default=None, min_length=1, max_length=500)
    sku: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    quantity_in_stock: int | None = Field(default=None, ge=0)
    in_stock: bool | None = None
    track_inventory: bool | None = None
    manage_variants: bool | None = None
    collection_ids: list[str] | None = None


class VariantCreate(CamelModel):
    """Request to create a variant."""

    variant_id: str = Field(..., min_length=1, max_length=100, description="External id")
    sku: str = Field(..., min_length=1, max_length=100, description="SKU (unique)")
    full_variant_name: str = Field(..., min_length=1, max_length=500)
    variant_name: str = Field(..., min_length=1, max_length=200)
    product_id: str = Field(..., min_length=1, description="Owning product")
    choices: dict[str, Any] | None = None
    stock: int = Field(default=0, ge=0)
    managed_variant: bool = True
    variant_media: Any | None = None
    color_id: str | None = None
    style_id: str | None = None
    collection_ids: list[str] = Field(default_factory=list, description="Collections to join")

    @field_validator("color_id", "style_id", mode="before")
    @classmethod
    def blank_references(cls, value: Any) -> Any:
        return _blank_to_none(value)


class VariantUpdate(UpdateModel):
    """Request to update a variant.

    ``collectionIds`` replaces the whole collection set when present.
    """

    non_nullable = frozenset(
        {
            "variant_id",
            "sku",
            "full_variant_name",
            "variant_name",
            "product_id",
            "stock",
            "managed_variant",
        }
    )

    variant_id: str | None = Field(default=None, min_length=1, max_length=100)
    sku: str | None = Field(default=None, min_length=1, max_length=100)
    full_variant_name: str | None = Field(default=None, min_length=1, max_length=500)
    variant_name: str | None = Field(default=None, min_length=1, max_length=200)
    product_id: str | None = Field(default=None, min_length=1)
    choices: dict[str, Any] | None = None
    stock: int | None = Field(default=None, ge=0)
    managed_variant: bool | None = None
    variant_media: Any | None = None
    color_id: str | None = None
    style_id: str | None = None
    collection_ids: list[str] | None = None

    @field_validator("color_id", "style_id", mode="before")
    @classmethod
    def blank_references(cls, value: Any) -> Any:
        return _blank_to_none(value)


class StockUpdate(CamelModel):
    """Request to change a variant's stock."""

    stock: int | None = Field(default=None, ge=0, description="Amount to set, add or subtract")
    operation: StockOperation = Field(default=StockOperation.SET, description="set, add or subtract")
