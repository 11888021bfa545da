"""Shared CRUD endpoints for catalog resources.

Every catalog resource exposes the same five routes: list, get, create,
update and delete. ``register_crud_routes`` adds them to a resource's
router from a ``CrudResource`` description. Resource modules declare
their extra routes first so that static paths win over ``/{item_id}``.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.dependencies import pagination_provider, repository_provider, search_filter
from app.api.schemas import ApiResponse, ErrorResponse, Pagination
from app.catalog.filters import CatalogFilter, PaginatedResult, PaginationParams
from app.catalog.repository import CatalogRepository

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@dataclass(frozen=True)
class CrudResource:
    """Description of a catalog resource's CRUD surface.

    Attributes:
        label: Singular entity name used in messages (e.g. "Color").
        plural: Plural name used in route summaries.
        repository: Repository class for the entity.
        create_schema: Request body for POST.
        update_schema: Request body for PUT.
        list_schema: Item shape on the list endpoint.
        detail_schema: Item shape on the get endpoint.
        write_schema: Item shape returned from create and update.
        filter_dependency: Dependency building the list filter.
        default_limit: Page size when ``limit`` is omitted.
        list_options: Loader options for the list endpoint.
        detail_options: Loader options for the get endpoint.
        write_options: Loader options for create and update responses.
    """

    label: str
    plural: str
    repository: type[CatalogRepository]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    list_schema: type[BaseModel]
    detail_schema: type[BaseModel]
    write_schema: type[BaseModel]
    filter_dependency: Callable[..., CatalogFilter] = search_filter
    default_limit: int = 50
    list_options: tuple[Any, ...] = ()
    detail_options: tuple[Any, ...] = ()
    write_options: tuple[Any, ...] = ()


# ============================================================================
# Envelope Helpers
# ============================================================================


def success_response(
    data: Any = None,
    message: str | None = None,
    pagination: Pagination | None = None,
) -> ApiResponse:
    """Wrap a payload in the success envelope.

    Only the fields actually supplied are emitted.
    """
    fields: dict[str, Any] = {"success": True}
    if data is not None:
        fields["data"] = data
    if message is not None:
        fields["message"] = message
    if pagination is not None:
        fields["pagination"] = pagination
    return ApiResponse(**fields)


def serialize(schema: type[BaseModel], entities: Sequence[Any]) -> list[BaseModel]:
    """Convert ORM rows to response schemas."""
    return [schema.model_validate(entity) for entity in entities]


def paginated_response(result: PaginatedResult, schema: type[BaseModel]) -> ApiResponse:
    """Wrap a page of ORM rows in the success envelope with pagination."""
    return success_response(
        data=serialize(schema, result.items),
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


def _fields(body: BaseModel) -> dict[str, Any]:
    return body.model_dump(exclude_unset=True)


# ============================================================================
# Route Registration
# ============================================================================


def register_crud_routes(router: APIRouter, resource: CrudResource) -> None:
    """Add list, get, create, update and delete routes for a resource.

    Args:
        router: Router carrying the resource prefix.
        resource: Resource description.
    """
    Repository = Annotated[CatalogRepository, Depends(repository_provider(resource.repository))]
    Filters = Annotated[CatalogFilter, Depends(resource.filter_dependency)]
    Page = Annotated[PaginationParams, Depends(pagination_provider(resource.default_limit))]
    CreateBody = resource.create_schema
    UpdateBody = resource.update_schema
    label = resource.label

    @router.get(
        "",
        response_model=ApiResponse[list[resource.list_schema]],  # type: ignore[valid-type]
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
        summary=f"List {resource.plural}",
    )
    async def list_items(filters: Filters, pagination: Page, repo: Repository) -> ApiResponse:
        result = await repo.list(filters, pagination, resource.list_options)
        return paginated_response(result, resource.list_schema)

    @router.get(
        "/{item_id}",
        response_model=ApiResponse[resource.detail_schema],  # type: ignore[valid-type]
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
        summary=f"Get {label.lower()} by ID",
    )
    async def get_item(item_id: str, repo: Repository) -> ApiResponse:
        entity = await repo.get_by_id(item_id, resource.detail_options)
        return success_response(resource.detail_schema.model_validate(entity))

    @router.post(
        "",
        response_model=ApiResponse[resource.write_schema],  # type: ignore[valid-type]
        response_model_exclude_unset=True,
        status_code=status.HTTP_201_CREATED,
        responses=ERROR_RESPONSES,
        summary=f"Create {label.lower()}",
    )
    async def create_item(body: CreateBody, repo: Repository) -> ApiResponse:  # type: ignore[valid-type]
        entity = await repo.create(_fields(body), resource.write_options)
        await repo.commit()
        return success_response(
            resource.write_schema.model_validate(entity),
            message=f"{label} created successfully",
        )

    @router.put(
        "/{item_id}",
        response_model=ApiResponse[resource.write_schema],  # type: ignore[valid-type]
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
        summary=f"Update {label.lower()}",
    )
    async def update_item(
        item_id: str,
        body: UpdateBody,  # type: ignore[valid-type]
        repo: Repository,
    ) -> ApiResponse:
        entity = await repo.update(item_id, _fields(body), resource.write_options)
        await repo.commit()
        return success_response(
            resource.write_schema.model_validate(entity),
            message=f"{label} updated successfully",
        )

    @router.delete(
        "/{item_id}",
        response_model=ApiResponse[None],
        response_model_exclude_unset=True,
        responses=ERROR_RESPONSES,
        summary=f"Delete {label.lower()}",
    )
    async def delete_item(item_id: str, repo: Repository) -> ApiResponse:
        await repo.delete(item_id)
        await repo.commit()
        return success_response(message=f"{label} deleted successfully")
