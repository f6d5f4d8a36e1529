"""
Catalog pydantic schemas with an aggregator.

Request models carry every validation rule; response models are built from
ORM rows with ``from_attributes``.
"""

from .common import (
    EntityRecord,
    Image,
    ImageAddRequest,
    ImageDeleteRequest,
    ImageAddBatchRequest,
    ImageDeleteBatchRequest,
    TransitionResult,
)
from .product import Product
from .course import Course, CourseCreate, CourseUpdate, CourseCreateResult, CourseDetails
from .course_part import CoursePart, CoursePartCreate, CoursePartUpdate, CoursePartCreateResult
from .seminar import Seminar, SeminarCreate, SeminarUpdate, SeminarCreateResult, SeminarDetails
from .training_session import (
    TrainingSession,
    TrainingSessionCreate,
    TrainingSessionUpdate,
    TrainingSessionCreateResult,
    TrainingSessionDetails,
)
from .physical_good import (
    PhysicalGood,
    PhysicalGoodCreate,
    PhysicalGoodUpdate,
    PhysicalGoodCreateResult,
    PhysicalGoodDetails,
)

__all__ = [
    # shared
    "EntityRecord",
    "Image",
    "ImageAddRequest",
    "ImageDeleteRequest",
    "ImageAddBatchRequest",
    "ImageDeleteBatchRequest",
    "TransitionResult",
    "Product",
    # course
    "Course",
    "CourseCreate",
    "CourseUpdate",
    "CourseCreateResult",
    "CourseDetails",
    "CoursePart",
    "CoursePartCreate",
    "CoursePartUpdate",
    "CoursePartCreateResult",
    # seminar
    "Seminar",
    "SeminarCreate",
    "SeminarUpdate",
    "SeminarCreateResult",
    "SeminarDetails",
    # training session
    "TrainingSession",
    "TrainingSessionCreate",
    "TrainingSessionUpdate",
    "TrainingSessionCreateResult",
    "TrainingSessionDetails",
    # physical good
    "PhysicalGood",
    "PhysicalGoodCreate",
    "PhysicalGoodUpdate",
    "PhysicalGoodCreateResult",
    "PhysicalGoodDetails",
]
