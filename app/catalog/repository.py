"""Catalog repositories for database operations.

One generic repository provides list/get/create/update/delete for every
catalog entity. Each entity configures it with its searchable columns,
unique fields, ordering and delete guards; entity subclasses add the
operations only they support (slug lookup, stock changes, bulk inserts,
collection membership).

Check-then-act sequences lock the target row with ``SELECT ... FOR
UPDATE`` so they cannot interleave with a concurrent request inside the
same transaction. SQLite ignores the lock clause.
"""

import builtins
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from sqlalchemy import Table, and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.filters import CatalogFilter, PaginatedResult, PaginationParams, SortOrder
from app.catalog.models import (
    Brand,
    Collection,
    Color,
    FitType,
    Product,
    ProductType,
    ProductVariant,
    StockOperation,
    Style,
    product_collections,
    variant_collections,
)
from app.domain.exceptions import (
    DuplicateError,
    NotFoundError,
    ReferencedEntityError,
    ValidationError,
)

logger = structlog.get_logger()

ModelT = TypeVar("ModelT")

DEFAULT_SORT_FIELD = "createdAt"

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def integrity_violation(exc: IntegrityError) -> str | None:
    """Classify an integrity error as a SQLSTATE code.

    asyncpg reports the SQLSTATE directly; SQLite only names the failed
    constraint in its message.

    Returns:
        ``UNIQUE_VIOLATION``, ``FOREIGN_KEY_VIOLATION``, or None for any
        other constraint.
    """
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if code:
        return code if code in (UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION) else None

    message = str(exc.orig).upper()
    if "UNIQUE" in message:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY" in message:
        return FOREIGN_KEY_VIOLATION
    return None


@dataclass(frozen=True)
class DeleteGuard:
    """Relation that blocks deleting an entity while it has rows.

    Attributes:
        column: Foreign-key column pointing at the guarded entity.
        relation: Name used when reporting counts.
    """

    column: Any
    relation: str


@dataclass(frozen=True)
class EntityConfig:
    """Per-entity configuration for the generic repository.

    Attributes:
        model: Mapped class.
        label: Entity name used in messages (e.g. "Color").
        search_columns: Columns matched by the ``search`` filter.
        unique_fields: Attributes that must be unique.
        duplicate_message: Message raised on a uniqueness collision.
        default_order: Ordering for entities without client-side sorting.
        sort_columns: API sort field name to column, for sortable entities.
        delete_guards: Relations that block deletion.
        guard_message: Message raised when a delete guard trips.
    """

    model: type
    label: str
    search_columns: tuple[Any, ...] = ()
    unique_fields: tuple[str, ...] = ()
    duplicate_message: str | None = None
    default_order: tuple[Any, ...] = ()
    sort_columns: Mapping[str, Any] = field(default_factory=dict)
    delete_guards: tuple[DeleteGuard, ...] = ()
    guard_message: str | None = None


class CatalogRepository(Generic[ModelT]):
    """Generic repository for catalog entities.

    Handles filtering, sorting, pagination, uniqueness checks and delete
    guards for the configured entity.

    Example usage:
        async with database.session() as session:
            repo = ColorRepository(session)
            page = await repo.list(CatalogFilter(search="blu"), PaginationParams(limit=10))
    """

    config: ClassVar[EntityConfig]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    @property
    def model(self) -> Any:
        return self.config.model

    async def commit(self) -> None:
        """Commit the current unit of work."""
        await self.session.commit()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list(
        self,
        filters: CatalogFilter,
        pagination: PaginationParams,
        options: Sequence[Any] = (),
    ) -> PaginatedResult[ModelT]:
        """Find entities with filtering, sorting, and pagination.

        Args:
            filters: Filter parameters.
            pagination: Page, limit and sort parameters.
            options: Loader options for related entities.

        Returns:
            Page of entities plus the count of the full filtered set.
        """
        conditions = filters.conditions(self.config.search_columns)

        query = select(self.model)
        count_query = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(and_(*conditions))
            count_query = count_query.where(and_(*conditions))

        query = (
            query.order_by(*self._ordering(pagination))
            .limit(pagination.limit)
            .offset(pagination.offset)
            .options(*options)
        )

        result = await self.session.execute(query)
        items = list(result.scalars().all())
        total = (await self.session.execute(count_query)).scalar_one()

        return PaginatedResult(
            items=items,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def find_by_id(
        self,
        entity_id: str,
        options: Sequence[Any] = (),
        for_update: bool = False,
    ) -> ModelT | None:
        """Get entity by ID.

        Args:
            entity_id: Entity ID.
            options: Loader options for related entities.
            for_update: Lock the row for the rest of the transaction.

        Returns:
            Entity if found, None otherwise.
        """
        query = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update(of=self.model)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(
        self,
        entity_id: str,
        options: Sequence[Any] = (),
        for_update: bool = False,
    ) -> ModelT:
        """Get entity by ID or raise NotFoundError."""
        entity = await self.find_by_id(entity_id, options, for_update)
        if entity is None:
            raise NotFoundError(self.config.label, entity_id)
        return entity

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, fields: Mapping[str, Any], options: Sequence[Any] = ()) -> ModelT:
        """Create an entity.

        Args:
            fields: Column values keyed by attribute name.
            options: Loader options for the returned entity.

        Returns:
            The created entity, reloaded with ``options``.

        Raises:
            DuplicateError: If a unique field collides.
        """
        entity = await self._insert(fields)
        return await self.get_by_id(entity.id, options)

    async def update(
        self,
        entity_id: str,
        fields: Mapping[str, Any],
        options: Sequence[Any] = (),
    ) -> ModelT:
        """Apply a partial update.

        Only the supplied fields change.

        Raises:
            NotFoundError: If the entity does not exist.
            DuplicateError: If a unique field collides.
        """
        entity = await self._apply_update(entity_id, fields)
        return await self.get_by_id(entity.id, options)

    async def delete(self, entity_id: str) -> None:
        """Delete an entity once no delete guard finds dependent rows.

        Raises:
            NotFoundError: If the entity does not exist.
            ReferencedEntityError: If dependent rows exist.
        """
        await self.get_by_id(entity_id, for_update=True)

        counts = await self.reference_counts(entity_id)
        if any(counts.values()):
            logger.warning(
                "Delete blocked by references",
                entity=self.config.label,
                entity_id=entity_id,
                references=counts,
            )
            raise ReferencedEntityError(
                self.config.label,
                entity_id,
                self.config.guard_message or f"{self.config.label} is still referenced",
                counts,
            )

        await self.session.execute(delete(self.model).where(self.model.id == entity_id))
        logger.info("Catalog entity deleted", entity=self.config.label, entity_id=entity_id)

    async def reference_counts(self, entity_id: str) -> dict[str, int]:
        """Count dependent rows for every delete guard."""
        counts: dict[str, int] = {}
        for guard in self.config.delete_guards:
            query = (
                select(func.count())
                .select_from(guard.column.table)
                .where(guard.column == entity_id)
            )
            counts[guard.relation] = (await self.session.execute(query)).scalar_one()
        return counts

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _insert(self, fields: Mapping[str, Any]) -> ModelT:
        await self._ensure_unique(fields)
        await self._check_references(fields)

        entity = self.model(**fields)
        self._before_save(entity)
        self.session.add(entity)
        await self._flush()

        logger.info("Catalog entity created", entity=self.config.label, entity_id=entity.id)
        return entity

    async def _apply_update(self, entity_id: str, fields: Mapping[str, Any]) -> ModelT:
        entity = await self.get_by_id(entity_id, for_update=True)
        await self._ensure_unique(fields, exclude_id=entity_id)
        await self._check_references(fields)

        for name, value in fields.items():
            setattr(entity, name, value)
        self._before_save(entity)
        await self._flush()

        logger.info(
            "Catalog entity updated",
            entity=self.config.label,
            entity_id=entity_id,
            fields=sorted(fields),
        )
        return entity

    def _before_save(self, entity: ModelT) -> None:
        """Derive computed columns before a flush."""

    async def _check_references(self, fields: Mapping[str, Any]) -> None:
        """Verify that foreign keys in ``fields`` point at existing rows."""

    async def _ensure_unique(
        self,
        fields: Mapping[str, Any],
        exclude_id: str | None = None,
    ) -> None:
        collisions = []
        for name in self.config.unique_fields:
            value = fields.get(name)
            if value is None:
                continue
            query = select(self.model.id).where(getattr(self.model, name) == value)
            if exclude_id is not None:
                query = query.where(self.model.id != exclude_id)
            if (await self.session.execute(query.limit(1))).first() is not None:
                collisions.append(name)

        if collisions:
            raise DuplicateError(self.config.label, collisions, self.config.duplicate_message)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            kind = integrity_violation(e)
            # A concurrent write raced past the pre-checks
            if kind == UNIQUE_VIOLATION:
                raise DuplicateError(
                    self.config.label,
                    list(self.config.unique_fields),
                    self.config.duplicate_message,
                ) from e
            if kind == FOREIGN_KEY_VIOLATION:
                raise ValidationError(
                    f"{self.config.label} references a record that no longer exists",
                    details={"entity": self.config.label},
                ) from e
            raise

    # ``list`` is shadowed by the method above inside this class body
    def _ordering(self, pagination: PaginationParams) -> builtins.list[Any]:
        if not self.config.sort_columns:
            return [*self.config.default_order, self.model.id]

        column = self.config.sort_columns.get(
            pagination.sort_by or DEFAULT_SORT_FIELD,
            self.config.sort_columns[DEFAULT_SORT_FIELD],
        )
        if pagination.sort_order == SortOrder.ASC:
            return [column.asc(), self.model.id.asc()]
        return [column.desc(), self.model.id.desc()]

    async def _missing_ids(self, model: Any, ids: Sequence[str]) -> builtins.list[str]:
        if not ids:
            return []
        result = await self.session.execute(select(model.id).where(model.id.in_(ids)))
        found = set(result.scalars().all())
        return [entity_id for entity_id in ids if entity_id not in found]

    async def _require_reference(self, model: Any, entity_id: str | None, label: str) -> None:
        if entity_id is None:
            return
        if await self._missing_ids(model, [entity_id]):
            raise ValidationError(
                f"{label} not found: {entity_id}",
                details={"entity": label, "id": entity_id},
            )


class CollectionMembershipMixin:
    """Replace-all management of an owner's collection join rows."""

    membership_table: ClassVar[Table]
    membership_key: ClassVar[str]

    session: AsyncSession

    async def create(self, fields: Mapping[str, Any], options: Sequence[Any] = ()) -> Any:
        fields = dict(fields)
        collection_ids = fields.pop("collection_ids", None) or []

        entity = await self._insert(fields)  # type: ignore[attr-defined]
        await self.replace_collections(entity.id, collection_ids)
        return await self.get_by_id(entity.id, options)  # type: ignore[attr-defined]

    async def update(
        self,
        entity_id: str,
        fields: Mapping[str, Any],
        options: Sequence[Any] = (),
    ) -> Any:
        fields = dict(fields)
        collection_ids = fields.pop("collection_ids", None)

        entity = await self._apply_update(entity_id, fields)  # type: ignore[attr-defined]
        if collection_ids is not None:
            await self.replace_collections(entity.id, collection_ids)
        return await self.get_by_id(entity.id, options)  # type: ignore[attr-defined]

    async def replace_collections(self, owner_id: str, collection_ids: Sequence[str]) -> None:
        """Delete every join row for the owner, then insert the new set.

        Raises:
            ValidationError: If any collection does not exist.
        """
        ids = list(dict.fromkeys(collection_ids))
        missing = await self._missing_ids(Collection, ids)  # type: ignore[attr-defined]
        if missing:
            raise ValidationError(
                f"Collection not found: {', '.join(missing)}",
                details={"entity": "Collection", "ids": missing},
            )

        table = self.membership_table
        await self.session.execute(
            delete(table).where(table.c[self.membership_key] == owner_id)
        )
        if ids:
            await self.session.execute(
                insert(table),
                [
                    {self.membership_key: owner_id, "collection_id": collection_id}
                    for collection_id in ids
                ],
            )


class BulkCreateMixin:
    """Insert many rows at once, skipping names that already exist."""

    bulk_plural: ClassVar[str]
    bulk_invalid_message: ClassVar[str]

    session: AsyncSession
    config: ClassVar[EntityConfig]

    def _bulk_fields(self, entry: Mapping[str, Any]) -> dict[str, Any] | None:
        """Column values for an entry, or None when it lacks required fields."""
        raise NotImplementedError

    def _fits_columns(self, fields: Mapping[str, Any]) -> bool:
        """Whether every string value fits its column's declared length."""
        columns = self.config.model.__table__.c
        for name, value in fields.items():
            length = getattr(columns[name].type, "length", None)
            if isinstance(value, str) and length is not None and len(value) > length:
                return False
        return True

    async def bulk_create(self, entries: Sequence[Mapping[str, Any]]) -> int:
        """Create many entities in one statement batch.

        Entries missing required fields, or with values longer than their
        columns, are dropped. Entries whose name
        already exists, or repeats an earlier entry, are skipped.

        Args:
            entries: Raw entries keyed by attribute name.

        Returns:
            Number of rows inserted.

        Raises:
            ValidationError: If the batch is empty or has no valid entry.
        """
        if not entries:
            raise ValidationError(f"{self.bulk_plural} array is required")

        candidates = [
            f
            for f in (self._bulk_fields(entry) for entry in entries)
            if f and self._fits_columns(f)
        ]
        if not candidates:
            raise ValidationError(self.bulk_invalid_message)

        model = self.config.model
        names = [c["name"] for c in candidates]
        result = await self.session.execute(select(model.name).where(model.name.in_(names)))
        seen = set(result.scalars().all())

        rows = []
        for candidate in candidates:
            if candidate["name"] in seen:
                continue
            seen.add(candidate["name"])
            rows.append(model(**candidate))

        self.session.add_all(rows)
        await self._flush()  # type: ignore[attr-defined]

        logger.info(
            "Catalog entities bulk created",
            entity=self.config.label,
            submitted=len(entries),
            valid=len(candidates),
            created=len(rows),
        )
        return len(rows)


# ============================================================================
# Entity Repositories
# ============================================================================


class ColorRepository(BulkCreateMixin, CatalogRepository[Color]):
    """Repository for colors."""

    config = EntityConfig(
        model=Color,
        label="Color",
        search_columns=(Color.name,),
        unique_fields=("name",),
        duplicate_message="Color name already exists",
        default_order=(Color.name.asc(),),
        delete_guards=(DeleteGuard(ProductVariant.color_id, "variants"),),
        guard_message="Cannot delete color that is used by product variants",
    )
    bulk_plural = "Colors"
    bulk_invalid_message = "At least one valid color with name is required"

    async def list_all(self) -> list[Color]:
        """Get every color, ordered by name."""
        result = await self.session.execute(select(Color).order_by(Color.name))
        return list(result.scalars().all())

    def _bulk_fields(self, entry: Mapping[str, Any]) -> dict[str, Any] | None:
        name = (entry.get("name") or "").strip()
        if not name:
            return None
        hex_code = (entry.get("hex_code") or "").strip()
        return {"name": name, "hex_code": hex_code or None}


class StyleRepository(BulkCreateMixin, CatalogRepository[Style]):
    """Repository for styles."""

    config = EntityConfig(
        model=Style,
        label="Style",
        search_columns=(Style.name,),
        unique_fields=("name",),
        duplicate_message="Style name already exists",
        default_order=(Style.name.asc(),),
        delete_guards=(DeleteGuard(ProductVariant.style_id, "variants"),),
        guard_message="Cannot delete style that is used by product variants",
    )
    bulk_plural = "Styles"
    bulk_invalid_message = "At least one valid style with name and fitType is required"

    def _bulk_fields(self, entry: Mapping[str, Any]) -> dict[str, Any] | None:
        name = (entry.get("name") or "").strip()
        fit_type = (entry.get("fit_type") or "").strip().upper()
        if not name or fit_type not in FitType.__members__:
            return None
        return {"name": name, "fit_type": FitType(fit_type)}


class BrandRepository(CatalogRepository[Brand]):
    """Repository for brands."""

    config = EntityConfig(
        model=Brand,
        label="Brand",
        search_columns=(Brand.name,),
        unique_fields=("name",),
        duplicate_message="Brand name already exists",
        default_order=(Brand.name.asc(),),
        delete_guards=(DeleteGuard(Product.brand_id, "products"),),
        guard_message="Cannot delete brand that has products",
    )


class CollectionRepository(CatalogRepository[Collection]):
    """Repository for collections."""

    config = EntityConfig(
        model=Collection,
        label="Collection",
        search_columns=(Collection.name, Collection.description),
        unique_fields=("name",),
        duplicate_message="Collection name already exists",
        default_order=(Collection.name.asc(),),
        delete_guards=(
            DeleteGuard(product_collections.c.collection_id, "products"),
            DeleteGuard(variant_collections.c.collection_id, "variants"),
        ),
        guard_message="Cannot delete collection that contains products or variants",
    )


class ProductRepository(CollectionMembershipMixin, CatalogRepository[Product]):
    """Repository for products.

    Formatted price strings are derived from the amount and currency on
    every write. Supplying ``collection_ids`` replaces the product's whole
    collection set.
    """

    config = EntityConfig(
        model=Product,
        label="Product",
        search_columns=(Product.name, Product.description, Product.sku),
        unique_fields=("slug", "sku"),
        duplicate_message="Product with this slug or SKU already exists",
        sort_columns={
            "createdAt": Product.created_at,
            "updatedAt": Product.updated_at,
            "name": Product.name,
            "price": Product.price,
            "sku": Product.sku,
            "quantityInStock": Product.quantity_in_stock,
        },
    )
    membership_table = product_collections
    membership_key = "product_id"

    async def get_by_slug(self, slug: str, options: Sequence[Any] = ()) -> Product:
        """Get product by slug or raise NotFoundError."""
        query = (
            select(Product)
            .where(Product.slug == slug)
            .options(*options)
            .execution_options(populate_existing=True)
        )
        product = (await self.session.execute(query)).scalar_one_or_none()
        if product is None:
            raise NotFoundError("Product", slug)
        return product

    def _before_save(self, entity: Product) -> None:
        currency = entity.currency or "USD"
        entity.formatted_price = _format_price(currency, entity.price)
        entity.formatted_discounted_price = _format_price(currency, entity.discounted_price)
        entity.formatted_price_per_unit = _format_price(currency, entity.price_per_unit)

    async def _check_references(self, fields: Mapping[str, Any]) -> None:
        await self._require_reference(Brand, fields.get("brand_id"), "Brand")
        await self._require_reference(ProductType, fields.get("product_type_id"), "Product type")


class VariantRepository(CollectionMembershipMixin, CatalogRepository[ProductVariant]):
    """Repository for product variants."""

    config = EntityConfig(
        model=ProductVariant,
        label="Variant",
        search_columns=(
            ProductVariant.variant_name,
            ProductVariant.full_variant_name,
            ProductVariant.sku,
        ),
        unique_fields=("variant_id", "sku"),
        duplicate_message="Variant with this variantId or SKU already exists",
        sort_columns={
            "createdAt": ProductVariant.created_at,
            "updatedAt": ProductVariant.updated_at,
            "variantName": ProductVariant.variant_name,
            "fullVariantName": ProductVariant.full_variant_name,
            "sku": ProductVariant.sku,
            "stock": ProductVariant.stock,
        },
    )
    membership_table = variant_collections
    membership_key = "variant_id"

    async def list_for_product(
        self,
        product_id: str,
        color_id: str | None = None,
        style_id: str | None = None,
        options: Sequence[Any] = (),
    ) -> list[ProductVariant]:
        """Get every variant of a product, ordered by variant name."""
        query = select(ProductVariant).where(ProductVariant.product_id == product_id)
        if color_id is not None:
            query = query.where(ProductVariant.color_id == color_id)
        if style_id is not None:
            query = query.where(ProductVariant.style_id == style_id)

        query = query.order_by(ProductVariant.variant_name.asc()).options(*options)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def adjust_stock(
        self,
        entity_id: str,
        stock: int | None,
        operation: StockOperation = StockOperation.SET,
        options: Sequence[Any] = (),
    ) -> ProductVariant:
        """Change a variant's stock.

        ``add`` sums, ``subtract`` floors at zero, ``set`` overwrites.

        Raises:
            ValidationError: If ``stock`` is missing.
            NotFoundError: If the variant does not exist.
        """
        if stock is None:
            raise ValidationError("Stock value is required")

        variant = await self.get_by_id(entity_id, for_update=True)
        previous = variant.stock

        if operation == StockOperation.ADD:
            variant.stock = previous + stock
        elif operation == StockOperation.SUBTRACT:
            variant.stock = max(0, previous - stock)
        else:
            variant.stock = stock
        await self._flush()

        logger.info(
            "Variant stock updated",
            entity_id=entity_id,
            operation=operation.value,
            previous=previous,
            stock=variant.stock,
        )
        return await self.get_by_id(entity_id, options)

    async def _check_references(self, fields: Mapping[str, Any]) -> None:
        product_id = fields.get("product_id")
        if product_id is not None and await self._missing_ids(Product, [product_id]):
            raise NotFoundError("Product", product_id)
        await self._require_reference(Color, fields.get("color_id"), "Color")
        await self._require_reference(Style, fields.get("style_id"), "Style")


def _format_price(currency: str, amount: float | None) -> str | None:
    if amount is None:
        return None
    return f"{currency} {amount:.2f}"
