"""Read-only product queries; products change only through the entity services."""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from catalog.db import schemas
from catalog.db.models import CatalogKind
from catalog.db.database import SessionFactory, get_session_factory, unit_of_work
from catalog.db.repositories import products as product_repo
from catalog.errors import not_found
from catalog.lifecycle import Visibility
from catalog.services.orchestrator import parse_id
from catalog.utils.config import get_settings


def _details_type(value):
    return value.value if isinstance(value, CatalogKind) else value


class ProductService:
    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self.session_factory = session_factory or get_session_factory()

    def get(self, product_id: Any, visibility: Visibility = Visibility.PUBLISHED) -> schemas.Product:
        product_id = parse_id(product_id)
        with unit_of_work(self.session_factory) as db:
            product = product_repo.get_product(db, product_id, visibility)
            if product is None:
                raise not_found(f"product {product_id} not found")
            return schemas.Product.model_validate(product)

    def list(self, visibility: Visibility = Visibility.PUBLISHED, details_type: Optional[str] = None,
             limit: Optional[int] = None, offset: int = 0) -> Tuple[List[schemas.Product], int]:
        details_type = _details_type(details_type)
        limit = get_settings().clamp_limit(limit)
        with unit_of_work(self.session_factory) as db:
            found = product_repo.list_products(db, visibility, details_type, limit=limit, offset=max(offset, 0))
            total = product_repo.count_products(db, visibility, details_type)
            return [schemas.Product.model_validate(p) for p in found], total

    def count(self, visibility: Visibility = Visibility.PUBLISHED, details_type: Optional[str] = None) -> int:
        details_type = _details_type(details_type)
        with unit_of_work(self.session_factory) as db:
            return product_repo.count_products(db, visibility, details_type)
