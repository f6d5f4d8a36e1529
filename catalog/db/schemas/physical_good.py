import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import EntityRecord, validate_name, validate_tags


class PhysicalGoodCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    short_description: str = Field(min_length=3, max_length=255)
    price: float = Field(ge=1)
    amount: int = Field(ge=0)
    shipping_required: bool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return validate_name(v)

    @model_validator(mode="after")
    def _shipping_needs_stock(self):
        if self.shipping_required and self.amount < 1:
            raise ValueError("amount must be at least 1 when shipping is required")
        return self


class PhysicalGoodUpdate(BaseModel):
    id: uuid.UUID
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=3, max_length=255)
    long_description: Optional[str] = Field(default=None, min_length=3, max_length=3000)
    price: Optional[float] = Field(default=None, ge=1)
    amount: Optional[int] = Field(default=None, ge=0)
    shipping_required: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return validate_name(v)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, v: Optional[List[str]]):
        return validate_tags(v)

    @model_validator(mode="after")
    def _shipping_needs_stock(self):
        if self.shipping_required and self.amount is not None and self.amount < 1:
            raise ValueError("amount must be at least 1 when shipping is required")
        return self


class PhysicalGoodCreateResult(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID


class PhysicalGood(EntityRecord):
    amount: int
    shipping_required: bool


class PhysicalGoodDetails(PhysicalGood):
    price: float
    product_id: uuid.UUID
