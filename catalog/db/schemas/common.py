"""Shared field validators and result models used by every catalog kind."""

import re
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator

from catalog.db.models.base import ensure_utc
from catalog.lifecycle import LifecycleOperation, LifecycleState

_TAG_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


def validate_name(value: Optional[str]) -> Optional[str]:
    if value is not None and value and not value[0].isalpha():
        raise ValueError("must start with a letter")
    return value


def validate_tags(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    if not 1 <= len(value) <= 10:
        raise ValueError("must contain between 1 and 10 tags")
    for tag in value:
        if not 3 <= len(tag) <= 20:
            raise ValueError(f"tag {tag!r} must be 3-20 characters long")
        if not _TAG_PATTERN.match(tag):
            raise ValueError(f"tag {tag!r} must be alphanumeric")
    return value


class TransitionResult(BaseModel):
    id: uuid.UUID
    operation: LifecycleOperation
    state: LifecycleState


class Image(BaseModel):
    id: uuid.UUID
    url: str
    secure_url: str
    public_id: str
    media_service_id: uuid.UUID
    owner_id: uuid.UUID
    owner_type: str
    model_config = ConfigDict(from_attributes=True)


class EntityRecord(BaseModel):
    """Columns every catalog entity carries."""

    id: uuid.UUID
    name: str
    short_description: str
    long_description: Optional[str] = None
    tags: Optional[List[str]] = None
    in_stock: bool
    uploaded_image_amount: int = 0
    images: List[Image] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def _aware_timestamps(cls, v: Optional[datetime]):
        return ensure_utc(v)


class ImageAddRequest(BaseModel):
    url: HttpUrl
    secure_url: HttpUrl
    public_id: str
    media_service_id: uuid.UUID
    owner_id: uuid.UUID

    @field_validator("public_id")
    @classmethod
    def _public_id_required(cls, v: str):
        if not v.strip():
            raise ValueError("public_id is required")
        return v


class ImageDeleteRequest(BaseModel):
    media_service_id: uuid.UUID
    owner_id: uuid.UUID


class ImageAddBatchRequest(BaseModel):
    url: HttpUrl
    secure_url: HttpUrl
    public_id: str
    media_service_id: uuid.UUID
    owner_ids: List[uuid.UUID]

    @field_validator("owner_ids")
    @classmethod
    def _owner_ids_bounds(cls, v: List[uuid.UUID]):
        if not 1 <= len(v) <= 100:
            raise ValueError("owner_ids must hold between 1 and 100 ids")
        return v

    @field_validator("public_id")
    @classmethod
    def _public_id_required(cls, v: str):
        if not v.strip():
            raise ValueError("public_id is required")
        return v


class ImageDeleteBatchRequest(BaseModel):
    media_service_id: uuid.UUID
    owner_ids: List[uuid.UUID]

    @field_validator("owner_ids")
    @classmethod
    def _owner_ids_bounds(cls, v: List[uuid.UUID]):
        if not 1 <= len(v) <= 100:
            raise ValueError("owner_ids must hold between 1 and 100 ids")
        return v
