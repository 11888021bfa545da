"""Color API endpoints.

Provides CRUD for colors plus an unpaginated listing and bulk creation.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.crud import (
    ERROR_RESPONSES,
    CrudResource,
    register_crud_routes,
    serialize,
    success_response,
)
from app.api.dependencies import repository_provider
from app.api.schemas import (
    ApiResponse,
    BulkResult,
    ColorBulkCreate,
    ColorCreate,
    ColorDetail,
    ColorListItem,
    ColorRead,
    ColorUpdate,
)
from app.catalog.relations import COLOR_DETAIL
from app.catalog.repository import ColorRepository

router = APIRouter(prefix="/colors", tags=["Colors"])

Repository = Annotated[ColorRepository, Depends(repository_provider(ColorRepository))]


@router.get(
    "/all",
    response_model=ApiResponse[list[ColorRead]],
    response_model_exclude_unset=True,
    summary="List all colors",
    description="Get every color ordered by name, without pagination.",
)
async def list_all_colors(repo: Repository) -> ApiResponse:
    """List every color.

    Returns:
        All colors ordered by name.
    """
    colors = await repo.list_all()
    return success_response(serialize(ColorRead, colors))


@router.post(
    "/bulk",
    response_model=ApiResponse[BulkResult],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create colors in bulk",
    description="Create many colors at once. Existing names are skipped.",
)
async def bulk_create_colors(body: ColorBulkCreate, repo: Repository) -> ApiResponse:
    """Create many colors.

    Args:
        body: Colors to create; entries without a name are ignored.
        repo: Color repository.

    Returns:
        Number of colors inserted.
    """
    count = await repo.bulk_create([entry.model_dump() for entry in body.colors])
    await repo.commit()
    return success_response(BulkResult(count=count), message=f"{count} colors created successfully")


register_crud_routes(
    router,
    CrudResource(
        label="Color",
        plural="colors",
        repository=ColorRepository,
        create_schema=ColorCreate,
        update_schema=ColorUpdate,
        list_schema=ColorListItem,
        detail_schema=ColorDetail,
        write_schema=ColorRead,
        detail_options=COLOR_DETAIL,
    ),
)
