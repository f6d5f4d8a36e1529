"""
Image repository functions.

An image row binds one media-service object to one owner through the
polymorphic ``(owner_id, owner_type)`` pair.
"""
from __future__ import annotations

import uuid
from typing import List, Sequence

from sqlalchemy.orm import Session

from catalog.db import models

Image = models.Image


def add_images(db: Session, images: Sequence[Image]) -> List[Image]:
    db.add_all(list(images))
    db.flush()
    return list(images)


def delete_all_for_owner(db: Session, owner_id: uuid.UUID, owner_type: str) -> int:
    return (
        db.query(Image)
        .filter(Image.owner_id == owner_id, Image.owner_type == owner_type)
        .delete(synchronize_session=False)
    )


def delete_for_owners(db: Session, owner_ids: Sequence[uuid.UUID], owner_type: str,
                      media_service_id: uuid.UUID) -> int:
    if not owner_ids:
        return 0
    return (
        db.query(Image)
        .filter(
            Image.owner_id.in_(list(owner_ids)),
            Image.owner_type == owner_type,
            Image.media_service_id == media_service_id,
        )
        .delete(synchronize_session=False)
    )


def find_owner_ids(db: Session, media_service_id: uuid.UUID, owner_type: str,
                   candidate_ids: Sequence[uuid.UUID]) -> List[uuid.UUID]:
    if not candidate_ids:
        return []
    rows = (
        db.query(Image.owner_id)
        .filter(
            Image.media_service_id == media_service_id,
            Image.owner_type == owner_type,
            Image.owner_id.in_(list(candidate_ids)),
        )
        .distinct()
        .all()
    )
    return [row[0] for row in rows]
