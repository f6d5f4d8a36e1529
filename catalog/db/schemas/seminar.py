"""
Seminar request and response models.

A seminar sells five products (reservation, early, late and the two
surcharges) and validates its dates relative to the current moment.
"""
import uuid
from datetime import UTC, datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from catalog.db.models.base import ensure_utc
from .common import EntityRecord, validate_name, validate_tags

MIN_LEAD_TIME = timedelta(hours=48)
MIN_DURATION = timedelta(hours=1)
PAYMENT_CUTOFF = timedelta(hours=24)

PRODUCT_SLOTS = (
    "reservation_product",
    "early_product",
    "late_product",
    "early_surcharge_product",
    "late_surcharge_product",
)


def check_schedule(
    date: Optional[datetime],
    ending_date: Optional[datetime],
    late_payment_date: Optional[datetime],
) -> None:
    """Raise ValueError for any violated bound whose operands are all present."""
    now = datetime.now(UTC)
    if date is not None and date < now + MIN_LEAD_TIME:
        raise ValueError("date must be at least 48 hours from now")
    if date is not None and ending_date is not None and ending_date < date + MIN_DURATION:
        raise ValueError("ending_date must be at least 1 hour after date")
    if late_payment_date is not None:
        if late_payment_date < now + PAYMENT_CUTOFF:
            raise ValueError("late_payment_date must be at least 24 hours from now")
        if date is not None and late_payment_date > date - PAYMENT_CUTOFF:
            raise ValueError("late_payment_date must be at least 24 hours before date")


class SeminarCreate(BaseModel):
    name: str = Field(min_length=3, max_length=255)
    short_description: str = Field(min_length=3, max_length=255)
    reservation_price: float = Field(ge=1)
    early_price: float = Field(ge=1)
    late_price: float = Field(ge=1)
    early_surcharge_price: float = Field(ge=1)
    late_surcharge_price: float = Field(ge=1)
    date: datetime
    ending_date: datetime
    place: str = Field(min_length=3, max_length=255)
    late_payment_date: datetime

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str):
        return validate_name(v)

    @field_validator("date", "ending_date", "late_payment_date")
    @classmethod
    def _aware(cls, v: datetime):
        return ensure_utc(v)

    @model_validator(mode="after")
    def _validate_schedule(self):
        check_schedule(self.date, self.ending_date, self.late_payment_date)
        return self


class SeminarUpdate(BaseModel):
    id: uuid.UUID
    name: Optional[str] = Field(default=None, min_length=3, max_length=255)
    short_description: Optional[str] = Field(default=None, min_length=3, max_length=255)
    long_description: Optional[str] = Field(default=None, min_length=3, max_length=3000)
    reservation_price: Optional[float] = Field(default=None, ge=1)
    early_price: Optional[float] = Field(default=None, ge=1)
    late_price: Optional[float] = Field(default=None, ge=1)
    early_surcharge_price: Optional[float] = Field(default=None, ge=1)
    late_surcharge_price: Optional[float] = Field(default=None, ge=1)
    date: Optional[datetime] = None
    ending_date: Optional[datetime] = None
    place: Optional[str] = Field(default=None, min_length=3, max_length=255)
    tags: Optional[List[str]] = None
    late_payment_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: Optional[str]):
        return validate_name(v)

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, v: Optional[List[str]]):
        return validate_tags(v)

    @field_validator("date", "ending_date", "late_payment_date")
    @classmethod
    def _aware(cls, v: Optional[datetime]):
        return ensure_utc(v)

    @model_validator(mode="after")
    def _validate_schedule(self):
        check_schedule(self.date, self.ending_date, self.late_payment_date)
        return self


class SeminarCreateResult(BaseModel):
    id: uuid.UUID
    reservation_product_id: uuid.UUID
    early_product_id: uuid.UUID
    late_product_id: uuid.UUID
    early_surcharge_product_id: uuid.UUID
    late_surcharge_product_id: uuid.UUID


class Seminar(EntityRecord):
    date: datetime
    ending_date: datetime
    place: str
    late_payment_date: datetime
    reservation_product_id: Optional[uuid.UUID] = None
    early_product_id: Optional[uuid.UUID] = None
    late_product_id: Optional[uuid.UUID] = None
    early_surcharge_product_id: Optional[uuid.UUID] = None
    late_surcharge_product_id: Optional[uuid.UUID] = None

    @field_validator("date", "ending_date", "late_payment_date")
    @classmethod
    def _aware(cls, v: datetime):
        return ensure_utc(v)


class SeminarDetails(Seminar):
    reservation_price: float
    early_price: float
    late_price: float
    early_surcharge_price: float
    late_surcharge_price: float
    current_price: float
    current_price_product_id: uuid.UUID
    current_surcharge_price: float
    current_surcharge_price_product_id: uuid.UUID
