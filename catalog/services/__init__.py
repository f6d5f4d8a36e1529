"""Catalog services: lifecycle orchestrators, sub-items, products and images."""

from .owners import Owner, OwnerAdapter, OwnerField
from .orchestrator import FieldTarget, LifecycleOrchestrator
from .courses import CourseService
from .seminars import SeminarService
from .training_sessions import TrainingSessionService
from .physical_goods import PhysicalGoodService
from .course_parts import CoursePartService
from .products import ProductService
from .images import IMAGE_LIMIT, ImageService

__all__ = [
    "Owner",
    "OwnerAdapter",
    "OwnerField",
    "FieldTarget",
    "LifecycleOrchestrator",
    "CourseService",
    "SeminarService",
    "TrainingSessionService",
    "PhysicalGoodService",
    "CoursePartService",
    "ProductService",
    "IMAGE_LIMIT",
    "ImageService",
]
