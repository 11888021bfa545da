"""Brand API endpoints."""

from fastapi import APIRouter

from app.api.crud import CrudResource, register_crud_routes
from app.api.schemas import BrandCreate, BrandDetail, BrandListItem, BrandRead, BrandUpdate
from app.catalog.relations import BRAND_DETAIL
from app.catalog.repository import BrandRepository

router = APIRouter(prefix="/brands", tags=["Brands"])

register_crud_routes(
    router,
    CrudResource(
        label="Brand",
        plural="brands",
        repository=BrandRepository,
        create_schema=BrandCreate,
        update_schema=BrandUpdate,
        list_schema=BrandListItem,
        detail_schema=BrandDetail,
        write_schema=BrandRead,
        detail_options=BRAND_DETAIL,
    ),
)
