"""
Entity repository functions.

Generic over the catalog entity models (Course, Seminar, TrainingSession,
PhysicalGood): every function takes the model class after the session.
Implements tiered reads, field-diff updates, the in-stock toggle, soft and
hard deletes, restore and uploaded-image counters.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Sequence

from sqlalchemy.orm import Query, Session, lazyload, selectinload

from catalog.db.models import now_utc
from catalog.lifecycle import Visibility

logger = logging.getLogger(__name__)


def apply_visibility(query: Query, model, visibility: Visibility, *, listing: bool = False,
                     published_column: str = "in_stock") -> Query:
    """Filter ``query`` for the tier.

    Single-record reads use the inclusive form of each tier; ``listing=True``
    narrows WITH_DELETED to soft-deleted rows and WITH_UNPUBLISHED to
    unpublished live rows.
    """
    published = getattr(model, published_column)
    if visibility == Visibility.PUBLISHED:
        return query.filter(published.is_(True), model.deleted_at.is_(None))
    if visibility == Visibility.WITH_UNPUBLISHED:
        query = query.filter(model.deleted_at.is_(None))
        return query.filter(published.is_(False)) if listing else query
    if visibility == Visibility.WITH_DELETED:
        return query.filter(model.deleted_at.is_not(None)) if listing else query
    raise ValueError(f"Unknown visibility tier: {visibility}")


def get_entity(db: Session, model, entity_id: uuid.UUID, visibility: Visibility = Visibility.PUBLISHED):
    """Return the entity with its images loaded, or None."""
    query = db.query(model).options(selectinload(model.images)).filter(model.id == entity_id)
    return apply_visibility(query, model, visibility).first()


def get_entity_reduced(db: Session, model, entity_id: uuid.UUID, visibility: Visibility = Visibility.PUBLISHED):
    """Return the entity row alone, without relationships."""
    query = db.query(model).options(lazyload("*")).filter(model.id == entity_id)
    return apply_visibility(query, model, visibility).first()


def list_entities(db: Session, model, visibility: Visibility = Visibility.PUBLISHED,
                  limit: int = 20, offset: int = 0) -> List[Any]:
    query = db.query(model).options(selectinload(model.images))
    query = apply_visibility(query, model, visibility, listing=True)
    return query.order_by(model.created_at.desc(), model.id).offset(offset).limit(limit).all()


def count_entities(db: Session, model, visibility: Visibility = Visibility.PUBLISHED) -> int:
    return apply_visibility(db.query(model), model, visibility, listing=True).count()


def list_entities_by_ids(db: Session, model, entity_ids: Sequence[uuid.UUID],
                         visibility: Visibility = Visibility.WITH_UNPUBLISHED) -> List[Any]:
    if not entity_ids:
        return []
    query = db.query(model).filter(model.id.in_(list(entity_ids)))
    return apply_visibility(query, model, visibility).all()


def create_entity(db: Session, entity):
    db.add(entity)
    db.flush()
    return entity


def set_in_stock(db: Session, model, entity_id: uuid.UUID, in_stock: bool) -> int:
    """Toggle the catalog flag on a live (non-deleted) entity."""
    return (
        db.query(model)
        .filter(model.id == entity_id, model.deleted_at.is_(None))
        .update({model.in_stock: in_stock, model.updated_at: now_utc()}, synchronize_session=False)
    )


def update_entity(db: Session, model, entity_id: uuid.UUID, updates: Dict[str, Any]) -> int:
    if not updates:
        return 0
    values = {getattr(model, column): value for column, value in updates.items()}
    values[model.updated_at] = now_utc()
    return (
        db.query(model)
        .filter(model.id == entity_id, model.deleted_at.is_(None))
        .update(values, synchronize_session=False)
    )


def delete_entity(db: Session, model, entity_id: uuid.UUID) -> int:
    """Soft delete: stamp deleted_at on a live row."""
    now = now_utc()
    return (
        db.query(model)
        .filter(model.id == entity_id, model.deleted_at.is_(None))
        .update({model.deleted_at: now, model.updated_at: now}, synchronize_session=False)
    )


def delete_entity_permanent(db: Session, model, entity_id: uuid.UUID) -> int:
    return db.query(model).filter(model.id == entity_id).delete(synchronize_session=False)


def restore_entity(db: Session, model, entity_id: uuid.UUID) -> int:
    """Clear deleted_at; matches the row whatever its current state."""
    return (
        db.query(model)
        .filter(model.id == entity_id)
        .update({model.deleted_at: None, model.updated_at: now_utc()}, synchronize_session=False)
    )


def decrement_image_count(db: Session, model, entity_ids: Iterable[uuid.UUID]) -> int:
    ids = list(entity_ids)
    if not ids:
        return 0
    rows = (
        db.query(model)
        .filter(model.id.in_(ids), model.uploaded_image_amount > 0)
        .update({model.uploaded_image_amount: model.uploaded_image_amount - 1}, synchronize_session=False)
    )
    logger.info(f"Decremented image count on {rows} {model.__tablename__} rows")
    return rows
