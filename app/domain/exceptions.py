"""Domain exceptions.

All catalog-level errors raised by repositories. Each error class carries
the short category and HTTP status used by the response envelope, so the
API layer maps them without inspecting messages.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    Attributes:
        category: Short error category shown in the ``error`` field.
        status_code: HTTP status used when the error reaches the API.
    """

    category = "Unexpected error"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Raised when a required field is missing or a value is invalid."""

    category = "Validation error"
    status_code = 400


class ConflictError(CatalogError):
    """Raised on uniqueness violations or blocked deletes."""

    category = "Conflict"
    status_code = 400


class NotFoundError(CatalogError):
    """Raised when an id or slug lookup misses."""

    category = "Not found"
    status_code = 404

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        """Initialize not found error.

        Args:
            entity: Entity label (e.g. "Color").
            identifier: The id or slug that was looked up.
        """
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": identifier},
        )
        self.entity = entity
        self.identifier = identifier


class DuplicateError(ConflictError):
    """Raised when a write collides with a unique column."""

    def __init__(self, entity: str, fields: list[str], message: str | None = None) -> None:
        """Initialize duplicate error.

        Args:
            entity: Entity label.
            fields: Unique fields that collided.
            message: Override for the default message.
        """
        super().__init__(
            message or f"{entity} with this {' or '.join(fields)} already exists",
            details={"entity": entity, "fields": fields},
        )


class ReferencedEntityError(ConflictError):
    """Raised when a delete guard finds dependent rows."""

    def __init__(self, entity: str, entity_id: str, message: str, counts: dict[str, int]) -> None:
        """Initialize referenced entity error.

        Args:
            entity: Entity label.
            entity_id: ID of the entity that could not be deleted.
            message: Human-readable reason.
            counts: Dependent row counts per relation.
        """
        super().__init__(
            message,
            details={"entity": entity, "id": entity_id, "references": counts},
        )
