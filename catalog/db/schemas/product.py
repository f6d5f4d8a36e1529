import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from catalog.db.models.base import ensure_utc


class Product(BaseModel):
    id: uuid.UUID
    price: float
    in_stock: bool
    details_id: uuid.UUID
    details_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def _aware_timestamps(cls, v: Optional[datetime]):
        return ensure_utc(v)
