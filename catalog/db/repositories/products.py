"""
Product repository functions.

Products reference their owning entity through the polymorphic
``(details_id, details_type)`` pair; lifecycle writes match on that pair.
"""
from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from catalog.db import models
from catalog.db.models import now_utc
from catalog.db.repositories.entities import apply_visibility
from catalog.lifecycle import Visibility

Product = models.Product


def _by_details(db: Session, details_id: uuid.UUID, details_type: str):
    return db.query(Product).filter(Product.details_id == details_id, Product.details_type == details_type)


def get_product(db: Session, product_id: uuid.UUID, visibility: Visibility = Visibility.PUBLISHED) -> Optional[Product]:
    query = db.query(Product).filter(Product.id == product_id)
    return apply_visibility(query, Product, visibility).first()


def get_products_by_details_id(db: Session, details_id: uuid.UUID, details_type: str,
                               visibility: Visibility = Visibility.PUBLISHED) -> List[Product]:
    query = _by_details(db, details_id, details_type).order_by(Product.created_at, Product.id)
    return apply_visibility(query, Product, visibility).all()


def select_by_ids(db: Session, product_ids: Sequence[uuid.UUID],
                  visibility: Visibility = Visibility.PUBLISHED) -> List[Product]:
    if not product_ids:
        return []
    query = db.query(Product).filter(Product.id.in_(list(product_ids)))
    return apply_visibility(query, Product, visibility).all()


def select_by_details_ids(db: Session, details_ids: Sequence[uuid.UUID], details_type: str,
                          visibility: Visibility = Visibility.PUBLISHED) -> List[Product]:
    if not details_ids:
        return []
    query = db.query(Product).filter(
        Product.details_id.in_(list(details_ids)),
        Product.details_type == details_type,
    )
    return apply_visibility(query, Product, visibility).all()


def list_products(db: Session, visibility: Visibility = Visibility.PUBLISHED, details_type: Optional[str] = None,
                  limit: int = 20, offset: int = 0) -> List[Product]:
    query = apply_visibility(db.query(Product), Product, visibility, listing=True)
    if details_type is not None:
        query = query.filter(Product.details_type == details_type)
    return query.order_by(Product.created_at.desc(), Product.id).offset(offset).limit(limit).all()


def count_products(db: Session, visibility: Visibility = Visibility.PUBLISHED, details_type: Optional[str] = None) -> int:
    query = apply_visibility(db.query(Product), Product, visibility, listing=True)
    if details_type is not None:
        query = query.filter(Product.details_type == details_type)
    return query.count()


def create_product(db: Session, product: Product) -> Product:
    db.add(product)
    db.flush()
    return product


def create_products(db: Session, products: Sequence[Product]) -> List[Product]:
    db.add_all(list(products))
    db.flush()
    return list(products)


def set_in_stock_by_details_id(db: Session, details_id: uuid.UUID, details_type: str, in_stock: bool) -> int:
    return (
        _by_details(db, details_id, details_type)
        .filter(Product.deleted_at.is_(None))
        .update({Product.in_stock: in_stock, Product.updated_at: now_utc()}, synchronize_session=False)
    )


def update_product(db: Session, product_id: uuid.UUID, updates: Dict[str, Any]) -> int:
    if not updates:
        return 0
    values = {getattr(Product, column): value for column, value in updates.items()}
    values[Product.updated_at] = now_utc()
    return (
        db.query(Product)
        .filter(Product.id == product_id, Product.deleted_at.is_(None))
        .update(values, synchronize_session=False)
    )


def delete_by_details_id(db: Session, details_id: uuid.UUID, details_type: str) -> int:
    now = now_utc()
    return (
        _by_details(db, details_id, details_type)
        .filter(Product.deleted_at.is_(None))
        .update({Product.deleted_at: now, Product.updated_at: now}, synchronize_session=False)
    )


def delete_permanent_by_details_id(db: Session, details_id: uuid.UUID, details_type: str) -> int:
    return _by_details(db, details_id, details_type).delete(synchronize_session=False)


def restore_by_details_id(db: Session, details_id: uuid.UUID, details_type: str) -> int:
    return _by_details(db, details_id, details_type).update(
        {Product.deleted_at: None, Product.updated_at: now_utc()}, synchronize_session=False
    )
