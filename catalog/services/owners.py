"""
Owner adapter: exposes one entity kind as an image owner.

The image engine works against ``OwnerAdapter`` only. Each adapter is bound to
one concrete entity model from the closed ``Owner`` union and checks every
owner it receives against that model before delegating to the repositories.
"""
from __future__ import annotations

import logging
import uuid
from enum import IntFlag
from typing import List, Optional, Sequence, Union

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from catalog.db import models
from catalog.db.repositories import entities as entity_repo
from catalog.db.repositories import images as image_repo
from catalog.errors import CatalogError, ErrorKind
from catalog.lifecycle import Visibility

logger = logging.getLogger(__name__)

Owner = Union[models.Course, models.Seminar, models.TrainingSession, models.PhysicalGood]


class OwnerField(IntFlag):
    """Owner columns persisted by ``OwnerAdapter.batch_update``."""

    NONE = 0
    IN_STOCK = 1
    UPLOADED_IMAGE_AMOUNT = 2


_FIELD_COLUMNS = {
    OwnerField.IN_STOCK: "in_stock",
    OwnerField.UPLOADED_IMAGE_AMOUNT: "uploaded_image_amount",
}


class OwnerAdapter:
    def __init__(self, model):
        if model not in models.ENTITY_MODELS:
            raise CatalogError(ErrorKind.INTERNAL, f"{getattr(model, '__name__', model)!s} cannot own images")
        self.model = model

    @property
    def owner_type(self) -> str:
        return self.model.kind.value

    def _cast(self, owner) -> Owner:
        if not isinstance(owner, self.model):
            raise CatalogError(
                ErrorKind.INTERNAL,
                f"owner adapter for {self.model.__name__} received {type(owner).__name__}",
            )
        return owner

    def get_with_unpublished(self, db: Session, owner_id: uuid.UUID) -> Optional[Owner]:
        return entity_repo.get_entity_reduced(db, self.model, owner_id, Visibility.WITH_UNPUBLISHED)

    def list_with_unpublished_by_ids(self, db: Session, owner_ids: Sequence[uuid.UUID]) -> List[Owner]:
        return entity_repo.list_entities_by_ids(db, self.model, owner_ids, Visibility.WITH_UNPUBLISHED)

    def add_image(self, db: Session, owner, image: models.Image) -> models.Image:
        return self.add_image_batch(db, [owner], image)[0]

    def delete_image(self, db: Session, owner, media_service_id: uuid.UUID) -> int:
        return self.delete_image_batch(db, [owner], media_service_id)

    def add_image_batch(self, db: Session, owners: Sequence, image: models.Image) -> List[models.Image]:
        """Attach a copy of ``image`` to every owner."""
        rows = [
            models.Image(
                url=image.url,
                secure_url=image.secure_url,
                public_id=image.public_id,
                media_service_id=image.media_service_id,
                owner_id=self._cast(owner).id,
                owner_type=self.owner_type,
            )
            for owner in owners
        ]
        return image_repo.add_images(db, rows)

    def delete_image_batch(self, db: Session, owners: Sequence, media_service_id: uuid.UUID) -> int:
        owner_ids = [self._cast(owner).id for owner in owners]
        return image_repo.delete_for_owners(db, owner_ids, self.owner_type, media_service_id)

    def batch_update(self, db: Session, owners: Sequence, fields: OwnerField) -> int:
        """Persist the flagged columns of each owner as currently held in memory."""
        columns = [column for flag, column in _FIELD_COLUMNS.items() if flag in fields]
        if not columns:
            return 0
        affected = 0
        for owner in owners:
            owner = self._cast(owner)
            values = {column: getattr(owner, column) for column in columns}
            affected += entity_repo.update_entity(db, self.model, owner.id, values)
            # The row now holds these values; record them as the loaded state.
            for column, value in values.items():
                set_committed_value(owner, column, value)
        return affected

    def find_owner_ids_by_image_id(self, db: Session, media_service_id: uuid.UUID,
                                   candidate_ids: Sequence[uuid.UUID]) -> List[uuid.UUID]:
        return image_repo.find_owner_ids(db, media_service_id, self.owner_type, candidate_ids)

    def decrement_image_count(self, db: Session, owner_ids: Sequence[uuid.UUID]) -> int:
        return entity_repo.decrement_image_count(db, self.model, owner_ids)
