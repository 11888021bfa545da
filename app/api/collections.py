"""Collection API endpoints."""

from fastapi import APIRouter

from app.api.crud import CrudResource, register_crud_routes
from app.api.schemas import (
    CollectionCreate,
    CollectionDetail,
    CollectionListItem,
    CollectionRead,
    CollectionUpdate,
)
from app.catalog.relations import COLLECTION_DETAIL
from app.catalog.repository import CollectionRepository

router = APIRouter(prefix="/collections", tags=["Collections"])

register_crud_routes(
    router,
    CrudResource(
        label="Collection",
        plural="collections",
        repository=CollectionRepository,
        create_schema=CollectionCreate,
        update_schema=CollectionUpdate,
        list_schema=CollectionListItem,
        detail_schema=CollectionDetail,
        write_schema=CollectionRead,
        detail_options=COLLECTION_DETAIL,
    ),
)
