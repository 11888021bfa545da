"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from app.api.brands import router as brands_router
from app.api.collections import router as collections_router
from app.api.colors import router as colors_router
from app.api.health import router as health_router
from app.api.products import router as products_router
from app.api.styles import router as styles_router
from app.api.variants import router as variants_router

__all__ = [
    "brands_router",
    "collections_router",
    "colors_router",
    "health_router",
    "products_router",
    "styles_router",
    "variants_router",
]
