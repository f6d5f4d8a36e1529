"""
Lifecycle orchestrator shared by every catalog entity kind.

Each public operation opens exactly one unit of work and keeps the entity,
its product(s) and its sub-items consistent inside it: products mirror the
entity's ``in_stock`` flag after every completed operation, and any failure
rolls the whole operation back. Kind-specific services subclass
``LifecycleOrchestrator`` and describe their model, schemas, product slots
and update vocabulary; sub-item cascades are hooks.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from catalog.db import models, schemas
from catalog.db.database import SessionFactory, get_session_factory, unit_of_work
from catalog.db.models import ensure_utc
from catalog.db.repositories import entities as entity_repo
from catalog.db.repositories import images as image_repo
from catalog.db.repositories import products as product_repo
from catalog.errors import CatalogError, ErrorKind, from_validation_error, invalid_argument, not_found
from catalog.lifecycle import (
    LifecycleOperation,
    LifecycleState,
    Visibility,
    can_transition,
    derive_state,
    resulting_state,
)
from catalog.services.owners import OwnerAdapter
from catalog.utils.config import get_settings

logger = logging.getLogger(__name__)

ProductMap = Dict[str, models.Product]
UpdateDiff = Dict[str, Dict[str, Any]]


@dataclass(frozen=True)
class FieldTarget:
    """Where an update-request field lands: record section and column."""

    section: str
    column: str


def parse_id(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as e:
        raise invalid_argument(f"invalid id: {value!r}", cause=e) from e


def parse_request(schema, request: Any):
    """Validate ``request`` (model or mapping) against ``schema``."""
    if isinstance(request, schema):
        return request
    payload = request.model_dump(exclude_unset=True) if isinstance(request, BaseModel) else request
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Rejected {schema.__name__}: {e.error_count()} validation error(s)")
        raise from_validation_error(e) from e


def values_differ(current: Any, new: Any) -> bool:
    if hasattr(current, "tzinfo") and hasattr(new, "tzinfo"):
        return ensure_utc(current) != ensure_utc(new)
    return current != new


class LifecycleOrchestrator:
    """Create/Publish/Unpublish/Update/Delete/PermanentDelete/Restore plus tiered reads."""

    model = None
    entity_section: str = ""
    product_slots: Tuple[str, ...] = ("product",)
    entity_create_fields: FrozenSet[str] = frozenset()
    update_fields: Dict[str, FieldTarget] = {}

    create_schema = None
    update_schema = None
    record_schema = None
    details_schema = None
    create_result_schema = None

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self.session_factory = session_factory or get_session_factory()

    @property
    def kind(self) -> str:
        return self.model.kind.value

    def owner_adapter(self) -> OwnerAdapter:
        """Adapter letting the image engine treat this kind as an image owner."""
        return OwnerAdapter(self.model)

    # Reads

    def get(self, entity_id: Any, visibility: Visibility = Visibility.PUBLISHED):
        entity_id = parse_id(entity_id)
        with unit_of_work(self.session_factory) as db:
            entity = entity_repo.get_entity(db, self.model, entity_id, visibility)
            if entity is None:
                logger.warning(f"{self.kind} {entity_id} not found in tier {visibility.value}")
                raise not_found(f"{self.kind} {entity_id} not found")
            products = self.resolve_products(db, entity, visibility)
            return self.build_details(entity, products)

    def list(self, visibility: Visibility = Visibility.PUBLISHED, limit: Optional[int] = None,
             offset: int = 0) -> Tuple[List[Any], int]:
        limit = get_settings().clamp_limit(limit)
        with unit_of_work(self.session_factory) as db:
            entities = entity_repo.list_entities(db, self.model, visibility, limit=limit, offset=max(offset, 0))
            total = entity_repo.count_entities(db, self.model, visibility)
            resolved = self.resolve_products_batch(db, entities, visibility)
            details = [self.build_details(e, resolved[e.id]) for e in entities if e.id in resolved]
        if len(details) < len(entities):
            logger.warning(
                f"Dropped {len(entities) - len(details)} {self.kind} record(s) with unresolved products from list"
            )
        return details, total

    def count(self, visibility: Visibility = Visibility.PUBLISHED) -> int:
        with unit_of_work(self.session_factory) as db:
            return entity_repo.count_entities(db, self.model, visibility)

    # Lifecycle

    def create(self, request: Any):
        req = parse_request(self.create_schema, request)
        with unit_of_work(self.session_factory) as db:
            entity = self.build_entity(req)
            products = self.build_products(req, entity)
            entity_repo.create_entity(db, entity)
            product_repo.create_products(db, list(products.values()))
            result = self.build_create_result(entity, products)
        logger.info(f"Created {self.kind} {result.id} with {len(products)} product(s)")
        return result

    def publish(self, entity_id: Any) -> schemas.TransitionResult:
        entity_id = parse_id(entity_id)
        op = LifecycleOperation.PUBLISH
        with unit_of_work(self.session_factory) as db:
            _, state = self._checked_entity(db, entity_id, op)
            self._require_entity_rows(entity_repo.set_in_stock(db, self.model, entity_id, True), entity_id)
            self._require_product_rows(
                product_repo.set_in_stock_by_details_id(db, entity_id, self.kind, True), entity_id
            )
        return self._transitioned(entity_id, op, state)

    def unpublish(self, entity_id: Any) -> schemas.TransitionResult:
        entity_id = parse_id(entity_id)
        op = LifecycleOperation.UNPUBLISH
        with unit_of_work(self.session_factory) as db:
            _, state = self._checked_entity(db, entity_id, op)
            self._require_entity_rows(entity_repo.set_in_stock(db, self.model, entity_id, False), entity_id)
            self._require_product_rows(
                product_repo.set_in_stock_by_details_id(db, entity_id, self.kind, False), entity_id
            )
            self.cascade_unpublish(db, entity_id)
        return self._transitioned(entity_id, op, state)

    def update(self, request: Any) -> UpdateDiff:
        """Apply only the fields that differ from storage; return them by section."""
        req = parse_request(self.update_schema, request)
        with unit_of_work(self.session_factory) as db:
            entity, _ = self._checked_entity(db, req.id, LifecycleOperation.UPDATE)
            products = self.resolve_products(db, entity, Visibility.WITH_UNPUBLISHED)
            diff = self.compute_diff(req, entity, products)
            self.apply_diff(db, entity.id, products, diff)
        logger.info(f"Updated {self.kind} {req.id}: {sorted(diff) or 'no changes'}")
        return diff

    def delete(self, entity_id: Any) -> schemas.TransitionResult:
        entity_id = parse_id(entity_id)
        op = LifecycleOperation.DELETE
        with unit_of_work(self.session_factory) as db:
            _, state = self._checked_entity(db, entity_id, op)
            self._require_entity_rows(entity_repo.set_in_stock(db, self.model, entity_id, False), entity_id)
            self.cascade_unpublish(db, entity_id)
            self._require_product_rows(
                product_repo.set_in_stock_by_details_id(db, entity_id, self.kind, False), entity_id
            )
            self._require_entity_rows(entity_repo.delete_entity(db, self.model, entity_id), entity_id)
            self._require_product_rows(product_repo.delete_by_details_id(db, entity_id, self.kind), entity_id)
            self.cascade_delete(db, entity_id)
        return self._transitioned(entity_id, op, state)

    def delete_permanent(self, entity_id: Any) -> schemas.TransitionResult:
        entity_id = parse_id(entity_id)
        op = LifecycleOperation.DELETE_PERMANENT
        with unit_of_work(self.session_factory) as db:
            _, state = self._checked_entity(db, entity_id, op)
            self._require_entity_rows(entity_repo.delete_entity_permanent(db, self.model, entity_id), entity_id)
            self._require_product_rows(
                product_repo.delete_permanent_by_details_id(db, entity_id, self.kind), entity_id
            )
            self.cascade_delete_permanent(db, entity_id)
            image_repo.delete_all_for_owner(db, entity_id, self.kind)
        return self._transitioned(entity_id, op, state)

    def restore(self, entity_id: Any) -> schemas.TransitionResult:
        """Clear the soft delete; the entity stays unpublished until published again."""
        entity_id = parse_id(entity_id)
        op = LifecycleOperation.RESTORE
        with unit_of_work(self.session_factory) as db:
            _, state = self._checked_entity(db, entity_id, op)
            self._require_entity_rows(entity_repo.restore_entity(db, self.model, entity_id), entity_id)
            self._require_product_rows(product_repo.restore_by_details_id(db, entity_id, self.kind), entity_id)
            self.cascade_restore(db, entity_id)
        return self._transitioned(entity_id, op, state)

    # Kind hooks

    def build_entity(self, req):
        return self.model(
            id=uuid.uuid4(),
            in_stock=False,
            uploaded_image_amount=0,
            **req.model_dump(include=set(self.entity_create_fields)),
        )

    def build_products(self, req, entity) -> ProductMap:
        return {"product": self._new_product(entity, req.price)}

    def build_create_result(self, entity, products: ProductMap):
        return self.create_result_schema(id=entity.id, product_id=products["product"].id)

    def resolve_products(self, db: Session, entity, visibility: Visibility) -> ProductMap:
        found = product_repo.get_products_by_details_id(db, entity.id, self.kind, visibility)
        if not found:
            logger.warning(f"No product for {self.kind} {entity.id} in tier {visibility.value}")
            raise not_found(f"product for {self.kind} {entity.id} not found")
        return {"product": found[0]}

    def resolve_products_batch(self, db: Session, entities, visibility: Visibility) -> Dict[uuid.UUID, ProductMap]:
        """Products per entity id; entities missing a product are absent."""
        found = product_repo.select_by_details_ids(db, [e.id for e in entities], self.kind, visibility)
        resolved: Dict[uuid.UUID, ProductMap] = {}
        for product in found:
            resolved.setdefault(product.details_id, {"product": product})
        return resolved

    def product_fields(self, entity, products: ProductMap) -> Dict[str, Any]:
        product = products["product"]
        return {"price": product.price, "product_id": product.id}

    def build_details(self, entity, products: ProductMap):
        payload = self.record_schema.model_validate(entity).model_dump()
        payload.update(self.product_fields(entity, products))
        return self.details_schema.model_validate(payload)

    def compute_diff(self, req, entity, products: ProductMap) -> UpdateDiff:
        records = {self.entity_section: entity, **products}
        diff: UpdateDiff = {}
        for field, value in req.model_dump(exclude_unset=True, exclude={"id"}).items():
            if value is None:
                continue
            target = self.update_fields[field]
            current = getattr(records[target.section], target.column)
            if values_differ(current, value):
                diff.setdefault(target.section, {})[target.column] = value
        return diff

    def apply_diff(self, db: Session, entity_id: uuid.UUID, products: ProductMap, diff: UpdateDiff) -> None:
        changes = diff.get(self.entity_section)
        if changes:
            self._require_entity_rows(entity_repo.update_entity(db, self.model, entity_id, changes), entity_id)
        for slot in self.product_slots:
            changes = diff.get(slot)
            if changes and product_repo.update_product(db, products[slot].id, changes) == 0:
                raise not_found(f"{slot} {products[slot].id} of {self.kind} {entity_id} not found")

    def cascade_unpublish(self, db: Session, entity_id: uuid.UUID) -> None:
        pass

    def cascade_delete(self, db: Session, entity_id: uuid.UUID) -> None:
        pass

    def cascade_delete_permanent(self, db: Session, entity_id: uuid.UUID) -> None:
        pass

    def cascade_restore(self, db: Session, entity_id: uuid.UUID) -> None:
        pass

    # Internals

    def _new_product(self, entity, price: float) -> models.Product:
        return models.Product(
            id=uuid.uuid4(),
            price=price,
            in_stock=False,
            details_id=entity.id,
            details_type=self.kind,
        )

    def _checked_entity(self, db: Session, entity_id: uuid.UUID, operation: LifecycleOperation):
        entity = entity_repo.get_entity_reduced(db, self.model, entity_id, Visibility.WITH_DELETED)
        if entity is None:
            logger.warning(f"{operation.value}: {self.kind} {entity_id} not found")
            raise not_found(f"{self.kind} {entity_id} not found")
        state = derive_state(entity.in_stock, entity.deleted_at)
        if not can_transition(operation, state):
            logger.warning(f"{operation.value}: {self.kind} {entity_id} is {state.value}")
            if state == LifecycleState.DELETED:
                raise not_found(f"{self.kind} {entity_id} is deleted")
            raise invalid_argument(f"cannot {operation.value} a {state.value} {self.kind}")
        return entity, state

    def _require_entity_rows(self, rows: int, entity_id: uuid.UUID) -> None:
        if rows == 0:
            raise not_found(f"{self.kind} {entity_id} not found")

    def _require_product_rows(self, rows: int, entity_id: uuid.UUID) -> None:
        expected = len(self.product_slots)
        if rows == 0:
            raise not_found(f"products of {self.kind} {entity_id} not found")
        if rows < expected:
            raise CatalogError(
                ErrorKind.PRODUCTS_NOT_FOUND,
                f"only {rows} of {expected} products of {self.kind} {entity_id} found",
            )

    def _transitioned(self, entity_id: uuid.UUID, operation: LifecycleOperation,
                      state: LifecycleState) -> schemas.TransitionResult:
        result = schemas.TransitionResult(id=entity_id, operation=operation, state=resulting_state(operation, state))
        logger.info(f"{operation.value}: {self.kind} {entity_id} -> {result.state.value}")
        return result
