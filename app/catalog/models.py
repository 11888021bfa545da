"""SQLAlchemy models for the fashion catalog.

Defines brands, product types, products, variants, colors, styles,
collections and the join tables that link collections to products and
variants.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
    select,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from app.infrastructure.database import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


class FitType(str, Enum):
    """Style fit categories."""

    SKINNY = "SKINNY"
    RELAXED = "RELAXED"
    OVERSIZED = "OVERSIZED"
    CLASSIC = "CLASSIC"


class StockOperation(str, Enum):
    """How a stock update combines with the current stock."""

    SET = "set"
    ADD = "add"
    SUBTRACT = "subtract"


class TimestampMixin:
    """Creation and last-update timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )


# ============================================================================
# Join Tables
# ============================================================================


product_collections = Table(
    "product_collections",
    Base.metadata,
    Column(
        "product_id",
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "collection_id",
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

variant_collections = Table(
    "variant_collections",
    Base.metadata,
    Column(
        "variant_id",
        String(36),
        ForeignKey("product_variants.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "collection_id",
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# ============================================================================
# Lookup Entities
# ============================================================================


class Brand(TimestampMixin, Base):
    """Brand that products are sold under."""

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    logo: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="brand",
        passive_deletes=True,
        order_by="Product.name",
    )

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, name={self.name})>"


class ProductType(TimestampMixin, Base):
    """Product classification (e.g. "T-Shirts", "Jeans")."""

    __tablename__ = "product_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="product_type",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<ProductType(id={self.id}, name={self.name})>"


class Color(TimestampMixin, Base):
    """Variant color."""

    __tablename__ = "colors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hex_code: Mapped[str | None] = mapped_column(String(20), nullable=True)

    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="color",
        passive_deletes=True,
        order_by="ProductVariant.variant_name",
    )

    def __repr__(self) -> str:
        return f"<Color(id={self.id}, name={self.name})>"


class Style(TimestampMixin, Base):
    """Variant style with its fit type."""

    __tablename__ = "styles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    fit_type: Mapped[FitType] = mapped_column(
        SAEnum(FitType, name="fit_type", native_enum=False, length=20),
        nullable=False,
    )

    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="style",
        passive_deletes=True,
        order_by="ProductVariant.variant_name",
    )

    def __repr__(self) -> str:
        return f"<Style(id={self.id}, name={self.name}, fit_type={self.fit_type})>"


class Collection(TimestampMixin, Base):
    """Named grouping of products and variants."""

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        secondary=product_collections,
        back_populates="collections",
        passive_deletes=True,
        order_by="Product.name",
    )
    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        secondary=variant_collections,
        back_populates="collections",
        passive_deletes=True,
        order_by="ProductVariant.variant_name",
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name})>"


# ============================================================================
# Products
# ============================================================================


class Product(TimestampMixin, Base):
    """Product in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Display name.
        slug: URL slug (unique).
        sku: Stock Keeping Unit (unique).
        price: Base price in major currency units.
        formatted_price: Price rendered as "<currency> <amount>".
        in_stock: Stored availability flag.
        quantity_in_stock: Product-level stock count.
        media_items, additional_info_sections, custom_text_fields,
        product_options, ribbons, discount: Free-form JSON blobs.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Pricing
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    discounted_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    formatted_price: Mapped[str | None] = mapped_column(String(50), nullable=True)
    formatted_discounted_price: Mapped[str | None] = mapped_column(String(50), nullable=True)
    price_per_unit: Mapped[float | None] = mapped_column(Float, nullable=True)
    formatted_price_per_unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    # Inventory
    quantity_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    track_inventory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    manage_variants: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # SEO & media
    product_page_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    seo_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seo_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    seo_keywords: Mapped[str | None] = mapped_column(Text, nullable=True)
    main_media: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    media_items: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    additional_info_sections: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    custom_text_fields: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    product_options: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    ribbons: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    discount: Mapped[Any | None] = mapped_column(JSONType, nullable=True)

    brand_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("brands.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    product_type_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("product_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    brand: Mapped[Brand | None] = relationship("Brand", back_populates="products")
    product_type: Mapped[ProductType | None] = relationship(
        "ProductType", back_populates="products"
    )
    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductVariant.variant_name",
    )
    collections: Mapped[list[Collection]] = relationship(
        "Collection",
        secondary=product_collections,
        back_populates="products",
        passive_deletes=True,
        order_by="Collection.name",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, sku={self.sku}, name={self.name[:30]}...)>"


class ProductVariant(TimestampMixin, Base):
    """A purchasable configuration of a product (e.g. size and color).

    Attributes:
        id: Unique variant identifier.
        variant_id: External variant identifier (unique).
        sku: Variant SKU (unique).
        full_variant_name: Name including the product name.
        variant_name: Short name (e.g. "Red / L").
        choices: Option name to chosen value map.
        stock: Units available; never negative after a subtract.
        product_id: Owning product; variants are removed with it.
        color_id: Optional color.
        style_id: Optional style.
    """

    __tablename__ = "product_variants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    variant_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    full_variant_name: Mapped[str] = mapped_column(String(500), nullable=False)
    variant_name: Mapped[str] = mapped_column(String(200), nullable=False)
    choices: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    managed_variant: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    variant_media: Mapped[Any | None] = mapped_column(JSONType, nullable=True)

    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    color_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("colors.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    style_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("styles.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Relationships
    product: Mapped[Product] = relationship("Product", back_populates="variants")
    color: Mapped[Color | None] = relationship("Color", back_populates="variants")
    style: Mapped[Style | None] = relationship("Style", back_populates="variants")
    collections: Mapped[list[Collection]] = relationship(
        "Collection",
        secondary=variant_collections,
        back_populates="variants",
        passive_deletes=True,
        order_by="Collection.name",
    )

    def __repr__(self) -> str:
        return f"<ProductVariant(id={self.id}, sku={self.sku}, stock={self.stock})>"


# ============================================================================
# Reference Counts
# ============================================================================


def _count_where(column, condition):
    return column_property(
        select(func.count(column)).where(condition).correlate_except(column.table).scalar_subquery()
    )


Brand.product_count = _count_where(Product.id, Product.brand_id == Brand.id)
Color.variant_count = _count_where(ProductVariant.id, ProductVariant.color_id == Color.id)
Style.variant_count = _count_where(ProductVariant.id, ProductVariant.style_id == Style.id)
Product.variant_count = _count_where(
    ProductVariant.id, ProductVariant.product_id == Product.id
)
Collection.product_count = _count_where(
    product_collections.c.product_id,
    product_collections.c.collection_id == Collection.id,
)
Collection.variant_count = _count_where(
    variant_collections.c.variant_id,
    variant_collections.c.collection_id == Collection.id,
)
