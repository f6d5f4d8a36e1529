"""
Seminar lifecycle service.

A seminar references its five products through dedicated id columns. Reads
fail with INCOMPLETE_DATA when a column is empty and PRODUCTS_NOT_FOUND when
a referenced product does not resolve in the requested tier; listings drop
such seminars instead of failing the page.
"""
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from catalog.db import models, schemas
from catalog.db.models import ensure_utc
from catalog.db.repositories import products as product_repo
from catalog.db.schemas.seminar import PRODUCT_SLOTS
from catalog.errors import CatalogError, ErrorKind
from catalog.lifecycle import Visibility
from catalog.services.orchestrator import FieldTarget, LifecycleOrchestrator, ProductMap

logger = logging.getLogger(__name__)

# Request price field -> product slot.
_PRICE_SLOTS = {
    "reservation_price": "reservation_product",
    "early_price": "early_product",
    "late_price": "late_product",
    "early_surcharge_price": "early_surcharge_product",
    "late_surcharge_price": "late_surcharge_product",
}


class SeminarService(LifecycleOrchestrator):
    model = models.Seminar
    entity_section = "seminar"
    product_slots = PRODUCT_SLOTS
    entity_create_fields = frozenset(
        {"name", "short_description", "date", "ending_date", "place", "late_payment_date"}
    )
    update_fields = {
        **{
            field: FieldTarget("seminar", field)
            for field in (
                "name",
                "short_description",
                "long_description",
                "date",
                "ending_date",
                "place",
                "tags",
                "late_payment_date",
            )
        },
        **{field: FieldTarget(slot, "price") for field, slot in _PRICE_SLOTS.items()},
    }

    create_schema = schemas.SeminarCreate
    update_schema = schemas.SeminarUpdate
    record_schema = schemas.Seminar
    details_schema = schemas.SeminarDetails
    create_result_schema = schemas.SeminarCreateResult

    def build_products(self, req, entity) -> ProductMap:
        products = {slot: self._new_product(entity, getattr(req, field)) for field, slot in _PRICE_SLOTS.items()}
        for slot, product in products.items():
            setattr(entity, f"{slot}_id", product.id)
        return products

    def build_create_result(self, entity, products: ProductMap):
        return self.create_result_schema(
            id=entity.id,
            **{f"{slot}_id": product.id for slot, product in products.items()},
        )

    def _product_ids(self, entity) -> Optional[Dict[str, uuid.UUID]]:
        ids = {slot: getattr(entity, f"{slot}_id") for slot in self.product_slots}
        if any(product_id is None for product_id in ids.values()):
            return None
        return ids

    def resolve_products(self, db: Session, entity, visibility: Visibility) -> ProductMap:
        ids = self._product_ids(entity)
        if ids is None:
            logger.warning(f"seminar {entity.id} is missing product references")
            raise CatalogError(ErrorKind.INCOMPLETE_DATA, f"seminar {entity.id} is missing product references")
        found = {p.id: p for p in product_repo.select_by_ids(db, list(ids.values()), visibility)}
        if any(product_id not in found for product_id in ids.values()):
            logger.warning(f"seminar {entity.id}: {len(found)} of {len(ids)} products resolved")
            raise CatalogError(
                ErrorKind.PRODUCTS_NOT_FOUND,
                f"only {len(found)} of {len(ids)} products of seminar {entity.id} found",
            )
        return {slot: found[product_id] for slot, product_id in ids.items()}

    def resolve_products_batch(self, db: Session, entities, visibility: Visibility) -> Dict[uuid.UUID, ProductMap]:
        wanted = {}
        for entity in entities:
            ids = self._product_ids(entity)
            if ids is not None:
                wanted[entity.id] = ids
        all_ids = [product_id for ids in wanted.values() for product_id in ids.values()]
        found = {p.id: p for p in product_repo.select_by_ids(db, all_ids, visibility)}
        return {
            entity_id: {slot: found[product_id] for slot, product_id in ids.items()}
            for entity_id, ids in wanted.items()
            if all(product_id in found for product_id in ids.values())
        }

    def product_fields(self, entity, products: ProductMap) -> Dict[str, Any]:
        """Slot prices plus the price pair in effect right now."""
        early = ensure_utc(entity.late_payment_date) > datetime.now(UTC)
        current = products["early_product" if early else "late_product"]
        surcharge = products["early_surcharge_product" if early else "late_surcharge_product"]
        fields = {field: products[slot].price for field, slot in _PRICE_SLOTS.items()}
        fields.update(
            current_price=current.price,
            current_price_product_id=current.id,
            current_surcharge_price=surcharge.price,
            current_surcharge_price_product_id=surcharge.id,
        )
        return fields
