"""
Course part service.

Parts belong to exactly one course and are addressed together with its id.
A part can only be published while its course is published, and part
numbers are unique among the live parts of a course. A single part can be
soft-deleted, restored (unpublished) or removed without touching its course.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from catalog.db import models, schemas
from catalog.db.database import SessionFactory, get_session_factory, unit_of_work
from catalog.db.repositories import course_parts as part_repo
from catalog.db.repositories import entities as entity_repo
from catalog.errors import invalid_argument, not_found
from catalog.lifecycle import Visibility
from catalog.services.orchestrator import parse_id, parse_request, values_differ
from catalog.utils.config import get_settings

logger = logging.getLogger(__name__)

_UPDATABLE = ("name", "short_description", "long_description", "number", "tags")


class CoursePartService:
    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self.session_factory = session_factory or get_session_factory()

    def get(self, part_id: Any, course_id: Any, visibility: Visibility = Visibility.PUBLISHED) -> schemas.CoursePart:
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            part = part_repo.get_part(db, part_id, course_id, visibility)
            if part is None:
                raise not_found(f"course part {part_id} of course {course_id} not found")
            return schemas.CoursePart.model_validate(part)

    def list(self, course_id: Any, visibility: Visibility = Visibility.PUBLISHED, limit: Optional[int] = None,
             offset: int = 0) -> Tuple[List[schemas.CoursePart], int]:
        course_id = parse_id(course_id)
        limit = get_settings().clamp_limit(limit)
        with unit_of_work(self.session_factory) as db:
            parts = part_repo.list_parts(db, course_id, visibility, limit=limit, offset=max(offset, 0))
            total = part_repo.count_parts(db, course_id, visibility)
            return [schemas.CoursePart.model_validate(p) for p in parts], total

    def create(self, request: Any) -> schemas.CoursePartCreateResult:
        req = parse_request(schemas.CoursePartCreate, request)
        with unit_of_work(self.session_factory) as db:
            self._live_course(db, req.course_id)
            self._ensure_number_free(db, req.course_id, req.number)
            part = models.CoursePart(
                id=uuid.uuid4(),
                course_id=req.course_id,
                name=req.name,
                short_description=req.short_description,
                number=req.number,
                published=False,
            )
            part_repo.create_part(db, part)
            result = schemas.CoursePartCreateResult(id=part.id, course_id=part.course_id)
        logger.info(f"Created course part {result.id} (#{req.number}) for course {req.course_id}")
        return result

    def publish(self, part_id: Any, course_id: Any) -> None:
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            course = self._live_course(db, course_id)
            if not course.in_stock:
                raise invalid_argument(f"course {course_id} must be published before its parts")
            if part_repo.set_published(db, part_id, course_id, True) == 0:
                raise not_found(f"course part {part_id} of course {course_id} not found")
        logger.info(f"Published course part {part_id}")

    def unpublish(self, part_id: Any, course_id: Any) -> None:
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            if part_repo.set_published(db, part_id, course_id, False) == 0:
                raise not_found(f"course part {part_id} of course {course_id} not found")
        logger.info(f"Unpublished course part {part_id}")

    def update(self, request: Any) -> Dict[str, Dict[str, Any]]:
        req = parse_request(schemas.CoursePartUpdate, request)
        with unit_of_work(self.session_factory) as db:
            part = part_repo.get_part(db, req.id, req.course_id, Visibility.WITH_UNPUBLISHED)
            if part is None:
                raise not_found(f"course part {req.id} of course {req.course_id} not found")
            changes = {
                field: value
                for field, value in req.model_dump(exclude_unset=True, include=set(_UPDATABLE)).items()
                if value is not None and values_differ(getattr(part, field), value)
            }
            if "number" in changes:
                self._ensure_number_free(db, req.course_id, changes["number"])
            if changes and part_repo.update_part(db, req.id, req.course_id, changes) == 0:
                raise not_found(f"course part {req.id} of course {req.course_id} not found")
        logger.info(f"Updated course part {req.id}: {sorted(changes) or 'no changes'}")
        return {"course_part": changes} if changes else {}

    def delete(self, part_id: Any, course_id: Any) -> None:
        """Soft delete one part; it must be published again after a restore."""
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            if part_repo.delete_part(db, part_id, course_id) == 0:
                raise not_found(f"course part {part_id} of course {course_id} not found")
        logger.info(f"Deleted course part {part_id}")

    def delete_permanent(self, part_id: Any, course_id: Any) -> None:
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            if part_repo.delete_part_permanent(db, part_id, course_id) == 0:
                raise not_found(f"course part {part_id} of course {course_id} not found")
        logger.info(f"Removed course part {part_id}")

    def restore(self, part_id: Any, course_id: Any) -> None:
        part_id, course_id = parse_id(part_id), parse_id(course_id)
        with unit_of_work(self.session_factory) as db:
            part = part_repo.get_part(db, part_id, course_id, Visibility.WITH_DELETED)
            if part is None or part.deleted_at is None:
                raise not_found(f"deleted course part {part_id} of course {course_id} not found")
            self._ensure_number_free(db, course_id, part.number)
            if part_repo.restore_part(db, part_id, course_id) == 0:
                raise not_found(f"deleted course part {part_id} of course {course_id} not found")
        logger.info(f"Restored course part {part_id}")

    def _live_course(self, db, course_id: uuid.UUID) -> models.Course:
        course = entity_repo.get_entity_reduced(db, models.Course, course_id, Visibility.WITH_UNPUBLISHED)
        if course is None:
            raise not_found(f"course {course_id} not found")
        return course

    def _ensure_number_free(self, db, course_id: uuid.UUID, number: int) -> None:
        if part_repo.get_part_by_number(db, course_id, number) is not None:
            raise invalid_argument(f"course {course_id} already has a part number {number}")
