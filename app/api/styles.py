"""Style API endpoints.

Provides CRUD for styles plus bulk creation and the fit type catalogue.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.crud import ERROR_RESPONSES, CrudResource, register_crud_routes, success_response
from app.api.dependencies import repository_provider, style_filter
from app.api.schemas import (
    ApiResponse,
    BulkResult,
    StyleBulkCreate,
    StyleCreate,
    StyleDetail,
    StyleListItem,
    StyleRead,
    StyleUpdate,
)
from app.catalog.models import FitType
from app.catalog.relations import STYLE_DETAIL
from app.catalog.repository import StyleRepository

router = APIRouter(prefix="/styles", tags=["Styles"])

Repository = Annotated[StyleRepository, Depends(repository_provider(StyleRepository))]


@router.get(
    "/fit-types",
    response_model=ApiResponse[list[FitType]],
    response_model_exclude_unset=True,
    summary="List fit types",
)
async def list_fit_types() -> ApiResponse:
    """List the fit types a style may have."""
    return success_response([fit_type.value for fit_type in FitType])


@router.post(
    "/bulk",
    response_model=ApiResponse[BulkResult],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create styles in bulk",
    description="Create many styles at once. Existing names are skipped.",
)
async def bulk_create_styles(body: StyleBulkCreate, repo: Repository) -> ApiResponse:
    """Create many styles.

    Entries without a name or with an unknown fit type are ignored.

    Returns:
        Number of styles inserted.
    """
    count = await repo.bulk_create([entry.model_dump() for entry in body.styles])
    await repo.commit()
    return success_response(BulkResult(count=count), message=f"{count} styles created successfully")


register_crud_routes(
    router,
    CrudResource(
        label="Style",
        plural="styles",
        repository=StyleRepository,
        create_schema=StyleCreate,
        update_schema=StyleUpdate,
        list_schema=StyleListItem,
        detail_schema=StyleDetail,
        write_schema=StyleRead,
        filter_dependency=style_filter,
        detail_options=STYLE_DETAIL,
    ),
)
