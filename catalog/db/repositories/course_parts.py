"""
Course part repository functions.

Parts are always addressed together with their course id; the owner-wide
helpers operate on the full set of parts of one course.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from catalog.db import models
from catalog.db.models import now_utc
from catalog.db.repositories.entities import apply_visibility
from catalog.lifecycle import Visibility

CoursePart = models.CoursePart


def _tiered(db: Session, visibility: Visibility, listing: bool = False):
    return apply_visibility(db.query(CoursePart), CoursePart, visibility, listing=listing,
                            published_column="published")


def get_part(db: Session, part_id: uuid.UUID, course_id: uuid.UUID,
             visibility: Visibility = Visibility.PUBLISHED) -> Optional[CoursePart]:
    return (
        _tiered(db, visibility)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id)
        .first()
    )


def get_part_by_number(db: Session, course_id: uuid.UUID, number: int) -> Optional[CoursePart]:
    return (
        db.query(CoursePart)
        .filter(CoursePart.course_id == course_id, CoursePart.number == number, CoursePart.deleted_at.is_(None))
        .first()
    )


def list_parts(db: Session, course_id: uuid.UUID, visibility: Visibility = Visibility.PUBLISHED,
               limit: int = 20, offset: int = 0) -> List[CoursePart]:
    return (
        _tiered(db, visibility, listing=True)
        .filter(CoursePart.course_id == course_id)
        .order_by(CoursePart.number, CoursePart.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_parts(db: Session, course_id: uuid.UUID, visibility: Visibility = Visibility.PUBLISHED) -> int:
    return _tiered(db, visibility, listing=True).filter(CoursePart.course_id == course_id).count()


def create_part(db: Session, part: CoursePart) -> CoursePart:
    db.add(part)
    db.flush()
    return part


def set_published(db: Session, part_id: uuid.UUID, course_id: uuid.UUID, published: bool) -> int:
    return (
        db.query(CoursePart)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id, CoursePart.deleted_at.is_(None))
        .update({CoursePart.published: published, CoursePart.updated_at: now_utc()}, synchronize_session=False)
    )


def update_part(db: Session, part_id: uuid.UUID, course_id: uuid.UUID, updates: Dict[str, Any]) -> int:
    if not updates:
        return 0
    values = {getattr(CoursePart, column): value for column, value in updates.items()}
    values[CoursePart.updated_at] = now_utc()
    return (
        db.query(CoursePart)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id, CoursePart.deleted_at.is_(None))
        .update(values, synchronize_session=False)
    )


def set_published_by_course_id(db: Session, course_id: uuid.UUID, published: bool) -> int:
    return (
        db.query(CoursePart)
        .filter(CoursePart.course_id == course_id)
        .update({CoursePart.published: published, CoursePart.updated_at: now_utc()}, synchronize_session=False)
    )


def delete_by_course_id(db: Session, course_id: uuid.UUID) -> int:
    now = now_utc()
    return (
        db.query(CoursePart)
        .filter(CoursePart.course_id == course_id, CoursePart.deleted_at.is_(None))
        .update({CoursePart.deleted_at: now, CoursePart.updated_at: now}, synchronize_session=False)
    )


def delete_permanent_by_course_id(db: Session, course_id: uuid.UUID) -> int:
    return db.query(CoursePart).filter(CoursePart.course_id == course_id).delete(synchronize_session=False)


def restore_by_course_id(db: Session, course_id: uuid.UUID) -> int:
    return (
        db.query(CoursePart)
        .filter(CoursePart.course_id == course_id)
        .update({CoursePart.deleted_at: None, CoursePart.updated_at: now_utc()}, synchronize_session=False)
    )


def delete_part(db: Session, part_id: uuid.UUID, course_id: uuid.UUID) -> int:
    """Soft delete one live part, unpublishing it in the same statement."""
    now = now_utc()
    return (
        db.query(CoursePart)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id, CoursePart.deleted_at.is_(None))
        .update(
            {CoursePart.published: False, CoursePart.deleted_at: now, CoursePart.updated_at: now},
            synchronize_session=False,
        )
    )


def delete_part_permanent(db: Session, part_id: uuid.UUID, course_id: uuid.UUID) -> int:
    return (
        db.query(CoursePart)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id)
        .delete(synchronize_session=False)
    )


def restore_part(db: Session, part_id: uuid.UUID, course_id: uuid.UUID) -> int:
    """Clear deleted_at on a soft-deleted part; it stays unpublished."""
    return (
        db.query(CoursePart)
        .filter(CoursePart.id == part_id, CoursePart.course_id == course_id, CoursePart.deleted_at.is_not(None))
        .update({CoursePart.deleted_at: None, CoursePart.updated_at: now_utc()}, synchronize_session=False)
    )
