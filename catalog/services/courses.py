"""
Course lifecycle service.

A course owns one product and any number of course parts; unpublishing or
deleting the course forces every part to unpublished, and delete, permanent
delete and restore cascade to the parts. A course without parts is valid.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from catalog.db import models, schemas
from catalog.db.repositories import course_parts as part_repo
from catalog.services.orchestrator import FieldTarget, LifecycleOrchestrator

logger = logging.getLogger(__name__)


class CourseService(LifecycleOrchestrator):
    model = models.Course
    entity_section = "course"
    entity_create_fields = frozenset({"name", "short_description", "topic", "access_duration"})
    update_fields = {
        "name": FieldTarget("course", "name"),
        "short_description": FieldTarget("course", "short_description"),
        "long_description": FieldTarget("course", "long_description"),
        "topic": FieldTarget("course", "topic"),
        "access_duration": FieldTarget("course", "access_duration"),
        "tags": FieldTarget("course", "tags"),
        "price": FieldTarget("product", "price"),
    }

    create_schema = schemas.CourseCreate
    update_schema = schemas.CourseUpdate
    record_schema = schemas.Course
    details_schema = schemas.CourseDetails
    create_result_schema = schemas.CourseCreateResult

    def cascade_unpublish(self, db: Session, entity_id: uuid.UUID) -> None:
        rows = part_repo.set_published_by_course_id(db, entity_id, False)
        logger.info(f"Unpublished {rows} part(s) of course {entity_id}")

    def cascade_delete(self, db: Session, entity_id: uuid.UUID) -> None:
        rows = part_repo.delete_by_course_id(db, entity_id)
        logger.info(f"Soft-deleted {rows} part(s) of course {entity_id}")

    def cascade_delete_permanent(self, db: Session, entity_id: uuid.UUID) -> None:
        rows = part_repo.delete_permanent_by_course_id(db, entity_id)
        logger.info(f"Removed {rows} part(s) of course {entity_id}")

    def cascade_restore(self, db: Session, entity_id: uuid.UUID) -> None:
        rows = part_repo.restore_by_course_id(db, entity_id)
        logger.info(f"Restored {rows} part(s) of course {entity_id}")
