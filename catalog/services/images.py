"""
Image engine: attaches and detaches image metadata on any owner kind.

Every owner holds at most ``IMAGE_LIMIT`` images. The engine never touches a
concrete entity model; it goes through the ``OwnerAdapter`` it is handed.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from catalog.db import models, schemas
from catalog.db.database import SessionFactory, get_session_factory, unit_of_work
from catalog.errors import CatalogError, ErrorKind
from catalog.services.orchestrator import parse_request
from catalog.services.owners import OwnerAdapter, OwnerField

logger = logging.getLogger(__name__)

IMAGE_LIMIT = 5


def _template(req) -> models.Image:
    return models.Image(
        url=str(req.url),
        secure_url=str(req.secure_url),
        public_id=req.public_id,
        media_service_id=req.media_service_id,
    )


class ImageService:
    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self.session_factory = session_factory or get_session_factory()

    def add_image(self, request: Any, adapter: OwnerAdapter) -> schemas.Image:
        req = parse_request(schemas.ImageAddRequest, request)
        with unit_of_work(self.session_factory) as db:
            owner = adapter.get_with_unpublished(db, req.owner_id)
            if owner is None:
                raise CatalogError(ErrorKind.OWNER_NOT_FOUND, f"{adapter.owner_type} {req.owner_id} not found")
            if owner.uploaded_image_amount >= IMAGE_LIMIT:
                logger.warning(f"{adapter.owner_type} {req.owner_id} already holds {IMAGE_LIMIT} images")
                raise CatalogError(
                    ErrorKind.IMAGE_LIMIT_EXCEEDED,
                    f"{adapter.owner_type} {req.owner_id} already holds {IMAGE_LIMIT} images",
                )
            if adapter.find_owner_ids_by_image_id(db, req.media_service_id, [owner.id]):
                raise CatalogError(
                    ErrorKind.INVALID_ARGUMENT,
                    f"image {req.media_service_id} is already attached to {adapter.owner_type} {req.owner_id}",
                )
            image = adapter.add_image(db, owner, _template(req))
            owner.uploaded_image_amount += 1
            adapter.batch_update(db, [owner], OwnerField.UPLOADED_IMAGE_AMOUNT)
            result = schemas.Image.model_validate(image)
        logger.info(f"Added image {req.media_service_id} to {adapter.owner_type} {req.owner_id}")
        return result

    def delete_image(self, request: Any, adapter: OwnerAdapter) -> None:
        req = parse_request(schemas.ImageDeleteRequest, request)
        with unit_of_work(self.session_factory) as db:
            owner = adapter.get_with_unpublished(db, req.owner_id)
            if owner is None:
                raise CatalogError(ErrorKind.OWNER_NOT_FOUND, f"{adapter.owner_type} {req.owner_id} not found")
            if adapter.delete_image(db, owner, req.media_service_id) == 0:
                raise CatalogError(
                    ErrorKind.IMAGE_NOT_FOUND_ON_OWNER,
                    f"image {req.media_service_id} is not attached to {adapter.owner_type} {req.owner_id}",
                )
            adapter.decrement_image_count(db, [owner.id])
        logger.info(f"Deleted image {req.media_service_id} from {adapter.owner_type} {req.owner_id}")

    def add_image_batch(self, request: Any, adapter: OwnerAdapter) -> int:
        """Attach one image to many owners; returns how many owners received it."""
        req = parse_request(schemas.ImageAddBatchRequest, request)
        with unit_of_work(self.session_factory) as db:
            owners = adapter.list_with_unpublished_by_ids(db, req.owner_ids)
            if not owners:
                raise CatalogError(ErrorKind.OWNERS_NOT_FOUND, f"none of {len(req.owner_ids)} owners found")
            holders = set(adapter.find_owner_ids_by_image_id(db, req.media_service_id, [o.id for o in owners]))
            eligible = [o for o in owners if o.uploaded_image_amount < IMAGE_LIMIT and o.id not in holders]
            if eligible:
                adapter.add_image_batch(db, eligible, _template(req))
                for owner in eligible:
                    owner.uploaded_image_amount += 1
                adapter.batch_update(db, eligible, OwnerField.UPLOADED_IMAGE_AMOUNT)
        logger.info(
            f"Added image {req.media_service_id} to {len(eligible)} of {len(req.owner_ids)} "
            f"requested {adapter.owner_type} owners"
        )
        return len(eligible)

    def delete_image_batch(self, request: Any, adapter: OwnerAdapter) -> int:
        """Detach one image from many owners; returns how many owners held it."""
        req = parse_request(schemas.ImageDeleteBatchRequest, request)
        with unit_of_work(self.session_factory) as db:
            owners = adapter.list_with_unpublished_by_ids(db, req.owner_ids)
            if not owners:
                raise CatalogError(ErrorKind.OWNERS_NOT_FOUND, f"none of {len(req.owner_ids)} owners found")
            holders = adapter.find_owner_ids_by_image_id(db, req.media_service_id, [o.id for o in owners])
            adapter.delete_image_batch(db, owners, req.media_service_id)
            if holders:
                adapter.decrement_image_count(db, holders)
        logger.info(f"Deleted image {req.media_service_id} from {len(holders)} {adapter.owner_type} owners")
        return len(holders)
