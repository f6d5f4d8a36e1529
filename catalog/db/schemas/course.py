import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import EntityRecord, validate_name, validate_tags


class CourseCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    short_description: str = Field(min_length=3, max_length=255)
    topic: str = Field(min_length=3, max_length=128)
    price: float = Field(ge=1)
    access_duration: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return validate_name(v)


class CourseUpdate(BaseModel):
    id: uuid.UUID
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=3, max_length=255)
    long_description: Optional[str] = Field(default=None, min_length=3, max_length=3000)
    topic: Optional[str] = Field(default=None, min_length=3, max_length=128)
    access_duration: Optional[int] = Field(default=None, ge=1)
    tags: Optional[List[str]] = None
    price: Optional[float] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return validate_name(v)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, v: Optional[List[str]]):
        return validate_tags(v)


class CourseCreateResult(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID


class Course(EntityRecord):
    topic: str
    access_duration: int


class CourseDetails(Course):
    """Course joined with its single product."""

    price: float
    product_id: uuid.UUID
