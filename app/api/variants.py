"""Variant API endpoints.

Provides variant listings, per-product variant lookup, variant writes
with collection membership, and stock adjustments.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.crud import (
    ERROR_RESPONSES,
    CrudResource,
    register_crud_routes,
    serialize,
    success_response,
)
from app.api.dependencies import repository_provider, variant_filter
from app.api.schemas import (
    ApiResponse,
    StockUpdate,
    VariantCreate,
    VariantDetail,
    VariantForProduct,
    VariantListItem,
    VariantStockResult,
    VariantUpdate,
    VariantWriteResult,
)
from app.catalog.relations import (
    VARIANT_DETAIL,
    VARIANT_FOR_PRODUCT,
    VARIANT_LIST,
    VARIANT_STOCK,
    VARIANT_WRITE,
)
from app.catalog.repository import VariantRepository

router = APIRouter(prefix="/variants", tags=["Variants"])

Repository = Annotated[VariantRepository, Depends(repository_provider(VariantRepository))]


@router.get(
    "/product/{product_id}",
    response_model=ApiResponse[list[VariantForProduct]],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="List variants of a product",
)
async def list_product_variants(
    product_id: str,
    repo: Repository,
    color_id: Annotated[str | None, Query(alias="colorId")] = None,
    style_id: Annotated[str | None, Query(alias="styleId")] = None,
) -> ApiResponse:
    """List every variant of a product ordered by variant name.

    An unknown product yields an empty list.

    Args:
        product_id: Owning product ID.
        repo: Variant repository.
        color_id: Optional color filter.
        style_id: Optional style filter.

    Returns:
        Variants with color, style and collection references.
    """
    variants = await repo.list_for_product(product_id, color_id, style_id, VARIANT_FOR_PRODUCT)
    return success_response(serialize(VariantForProduct, variants))


@router.patch(
    "/{variant_id}/stock",
    response_model=ApiResponse[VariantStockResult],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Update variant stock",
    description="Set, add to, or subtract from a variant's stock. Subtraction stops at zero.",
)
async def update_variant_stock(
    variant_id: str,
    body: StockUpdate,
    repo: Repository,
) -> ApiResponse:
    """Change a variant's stock.

    Args:
        variant_id: Variant ID.
        body: Amount and operation.
        repo: Variant repository.

    Returns:
        Updated variant with product, color and style.

    Raises:
        ValidationError: If no stock value is given.
        NotFoundError: If the variant does not exist.
    """
    variant = await repo.adjust_stock(variant_id, body.stock, body.operation, VARIANT_STOCK)
    await repo.commit()
    return success_response(
        VariantStockResult.model_validate(variant),
        message="Variant stock updated successfully",
    )


register_crud_routes(
    router,
    CrudResource(
        label="Variant",
        plural="variants",
        repository=VariantRepository,
        create_schema=VariantCreate,
        update_schema=VariantUpdate,
        list_schema=VariantListItem,
        detail_schema=VariantDetail,
        write_schema=VariantWriteResult,
        filter_dependency=variant_filter,
        default_limit=20,
        list_options=VARIANT_LIST,
        detail_options=VARIANT_DETAIL,
        write_options=VARIANT_WRITE,
    ),
)
