"""
Catalog error kinds.

Every failure surfaced by the services is a ``CatalogError`` carrying one of
the closed ``ErrorKind`` values, so transport layers can map kinds to status
codes without string matching.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import ValidationError


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    INCOMPLETE_DATA = "incomplete_data"
    PRODUCTS_NOT_FOUND = "products_not_found"
    IMAGE_LIMIT_EXCEEDED = "image_limit_exceeded"
    IMAGE_NOT_FOUND_ON_OWNER = "image_not_found_on_owner"
    OWNER_NOT_FOUND = "owner_not_found"
    OWNERS_NOT_FOUND = "owners_not_found"
    INTERNAL = "internal"


class CatalogError(Exception):
    """Error raised by catalog services; inspect ``kind`` to classify it."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message
        self.cause = cause


def invalid_argument(message: str, cause: Optional[BaseException] = None) -> CatalogError:
    return CatalogError(ErrorKind.INVALID_ARGUMENT, message, cause)


def not_found(message: str) -> CatalogError:
    return CatalogError(ErrorKind.NOT_FOUND, message)


def from_validation_error(exc: ValidationError) -> CatalogError:
    """Flatten pydantic errors into a single invalid-argument error."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{loc}: {err.get('msg')}")
    return invalid_argument("; ".join(parts), cause=exc)
