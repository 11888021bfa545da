"""Eager-load plans per read operation.

Each endpoint expands a fixed set of related entities. The plans here are
the loader options passed to the repository; the response schemas in
``app.api.schemas`` only read what the matching plan loads.
"""

from sqlalchemy.orm import selectinload

from app.catalog.models import Brand, Collection, Color, Product, ProductVariant, Style

# Products
PRODUCT_LIST = (
    selectinload(Product.brand),
    selectinload(Product.product_type),
    selectinload(Product.variants).selectinload(ProductVariant.color),
    selectinload(Product.variants).selectinload(ProductVariant.style),
    selectinload(Product.collections),
)

PRODUCT_DETAIL = (
    selectinload(Product.brand),
    selectinload(Product.product_type),
    selectinload(Product.variants).selectinload(ProductVariant.color),
    selectinload(Product.variants).selectinload(ProductVariant.style),
    selectinload(Product.variants).selectinload(ProductVariant.collections),
    selectinload(Product.collections),
)

PRODUCT_WRITE = (
    selectinload(Product.brand),
    selectinload(Product.product_type),
    selectinload(Product.collections),
)

# Variants
VARIANT_LIST = (
    selectinload(ProductVariant.product),
    selectinload(ProductVariant.color),
    selectinload(ProductVariant.style),
    selectinload(ProductVariant.collections),
)

VARIANT_DETAIL = VARIANT_LIST

VARIANT_FOR_PRODUCT = (
    selectinload(ProductVariant.color),
    selectinload(ProductVariant.style),
    selectinload(ProductVariant.collections),
)

VARIANT_WRITE = VARIANT_LIST

VARIANT_STOCK = (
    selectinload(ProductVariant.product),
    selectinload(ProductVariant.color),
    selectinload(ProductVariant.style),
)

# Colors and styles: variants with their owning product
COLOR_DETAIL = (selectinload(Color.variants).selectinload(ProductVariant.product),)

STYLE_DETAIL = (selectinload(Style.variants).selectinload(ProductVariant.product),)

# Brands
BRAND_DETAIL = (selectinload(Brand.products),)

# Collections. A product can be reached both directly and through one of
# its variants; both paths load the same attributes, or a reload along the
# variant path leaves the product's brand unloaded.
COLLECTION_DETAIL = (
    selectinload(Collection.products).selectinload(Product.brand),
    selectinload(Collection.products).selectinload(Product.product_type),
    selectinload(Collection.variants)
    .selectinload(ProductVariant.product)
    .selectinload(Product.brand),
    selectinload(Collection.variants)
    .selectinload(ProductVariant.product)
    .selectinload(Product.product_type),
    selectinload(Collection.variants).selectinload(ProductVariant.color),
    selectinload(Collection.variants).selectinload(ProductVariant.style),
)
