"""Domain layer - catalog exceptions.

Example usage:
    from app.domain import NotFoundError

    raise NotFoundError("Color", color_id)
"""

from app.domain.exceptions import (
    CatalogError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    ReferencedEntityError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "ConflictError",
    "DuplicateError",
    "NotFoundError",
    "ReferencedEntityError",
    "ValidationError",
]
