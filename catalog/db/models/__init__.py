"""
Catalog SQLAlchemy models with an aggregator.

Exposes `Base`, `now_utc`, the `CatalogKind` discriminator and all ORM classes.
"""

from .base import Base, CatalogKind, ensure_utc, now_utc  # re-export

# Catalog entities
from .course import Course
from .course_part import CoursePart
from .seminar import Seminar
from .training_session import TrainingSession
from .physical_good import PhysicalGood

# Attached records
from .product import Product
from .image import Image

ENTITY_MODELS = (Course, Seminar, TrainingSession, PhysicalGood)

__all__ = [
    # base
    "Base",
    "CatalogKind",
    "ensure_utc",
    "now_utc",
    # entities
    "Course",
    "CoursePart",
    "Seminar",
    "TrainingSession",
    "PhysicalGood",
    "ENTITY_MODELS",
    # attached
    "Product",
    "Image",
]
