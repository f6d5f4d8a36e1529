import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.db.models.base import ensure_utc
from .common import validate_name, validate_tags


class CoursePartCreate(BaseModel):
    course_id: uuid.UUID
    name: str = Field(min_length=3, max_length=255)
    short_description: str = Field(min_length=3, max_length=255)
    number: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return validate_name(v)


class CoursePartUpdate(BaseModel):
    id: uuid.UUID
    course_id: uuid.UUID
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=3, max_length=255)
    long_description: Optional[str] = Field(default=None, min_length=3, max_length=3000)
    number: Optional[int] = Field(default=None, ge=1)
    tags: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return validate_name(v)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, v: Optional[List[str]]):
        return validate_tags(v)


class CoursePartCreateResult(BaseModel):
    id: uuid.UUID
    course_id: uuid.UUID


class CoursePart(BaseModel):
    id: uuid.UUID
    course_id: uuid.UUID
    number: int
    name: str
    short_description: str
    long_description: Optional[str] = None
    tags: Optional[List[str]] = None
    published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def _aware_timestamps(cls, v: Optional[datetime]):
        return ensure_utc(v)
