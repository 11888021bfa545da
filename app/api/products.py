"""Product API endpoints.

Provides filtered, sorted and paginated product listings, lookup by id
or slug, and product writes with collection membership.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.crud import ERROR_RESPONSES, CrudResource, register_crud_routes, success_response
from app.api.dependencies import product_filter, repository_provider
from app.api.schemas import (
    ApiResponse,
    ProductCreate,
    ProductDetail,
    ProductListItem,
    ProductUpdate,
    ProductWriteResult,
)
from app.catalog.relations import PRODUCT_DETAIL, PRODUCT_LIST, PRODUCT_WRITE
from app.catalog.repository import ProductRepository

router = APIRouter(prefix="/products", tags=["Products"])

Repository = Annotated[ProductRepository, Depends(repository_provider(ProductRepository))]


@router.get(
    "/slug/{slug}",
    response_model=ApiResponse[ProductDetail],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Get product by slug",
)
async def get_product_by_slug(slug: str, repo: Repository) -> ApiResponse:
    """Get a product by its URL slug.

    Args:
        slug: Product slug.
        repo: Product repository.

    Returns:
        Product with brand, product type, variants and collections.

    Raises:
        NotFoundError: If no product has this slug.
    """
    product = await repo.get_by_slug(slug, PRODUCT_DETAIL)
    return success_response(ProductDetail.model_validate(product))


register_crud_routes(
    router,
    CrudResource(
        label="Product",
        plural="products",
        repository=ProductRepository,
        create_schema=ProductCreate,
        update_schema=ProductUpdate,
        list_schema=ProductListItem,
        detail_schema=ProductDetail,
        write_schema=ProductWriteResult,
        filter_dependency=product_filter,
        default_limit=20,
        list_options=PRODUCT_LIST,
        detail_options=PRODUCT_DETAIL,
        write_options=PRODUCT_WRITE,
    ),
)
