import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .common import EntityRecord, validate_name, validate_tags

SessionFormat = Literal["online", "offline"]


def check_duration(value: Optional[int]) -> Optional[int]:
    if value is not None and value % 30 != 0:
        raise ValueError("duration_minutes must be a multiple of 30")
    return value


class TrainingSessionCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    short_description: str = Field(min_length=3, max_length=255)
    duration_minutes: int = Field(ge=30)
    format: SessionFormat
    price: float = Field(ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return validate_name(v)

    @field_validator("duration_minutes")
    @classmethod
    def _validate_duration(cls, v: int):
        return check_duration(v)


class TrainingSessionUpdate(BaseModel):
    id: uuid.UUID
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=3, max_length=255)
    long_description: Optional[str] = Field(default=None, min_length=3, max_length=3000)
    duration_minutes: Optional[int] = Field(default=None, ge=30)
    format: Optional[SessionFormat] = None
    tags: Optional[List[str]] = None
    price: Optional[float] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return validate_name(v)

    @field_validator("duration_minutes")
    @classmethod
    def _validate_duration(cls, v: Optional[int]):
        return check_duration(v)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, v: Optional[List[str]]):
        return validate_tags(v)


class TrainingSessionCreateResult(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID


class TrainingSession(EntityRecord):
    duration_minutes: int
    format: str


class TrainingSessionDetails(TrainingSession):
    price: float
    product_id: uuid.UUID
