import uuid
from sqlalchemy import Boolean, Column, String, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from .base import Base, CatalogKind, now_utc


class Seminar(Base):
    __tablename__ = 'seminars'
    kind = CatalogKind.SEMINAR

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    short_description = Column(String(255), nullable=False)
    long_description = Column(Text, nullable=True)
    tags = Column(JSONB, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False)
    ending_date = Column(DateTime(timezone=True), nullable=False)
    place = Column(String(255), nullable=False)
    late_payment_date = Column(DateTime(timezone=True), nullable=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    uploaded_image_amount = Column(Integer, nullable=False, default=0)
    # One product per price slot; all five must resolve for a complete seminar.
    reservation_product_id = Column(UUID(as_uuid=True), nullable=True)
    early_product_id = Column(UUID(as_uuid=True), nullable=True)
    late_product_id = Column(UUID(as_uuid=True), nullable=True)
    early_surcharge_product_id = Column(UUID(as_uuid=True), nullable=True)
    late_surcharge_product_id = Column(UUID(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    images = relationship(
        "Image",
        primaryjoin="and_(Seminar.id == foreign(Image.owner_id), Image.owner_type == 'seminar')",
        order_by="Image.created_at",
        viewonly=True,
    )

    __table_args__ = (
        Index('idx_seminars_deleted_at', 'deleted_at'),
        Index('idx_seminars_date', 'date'),
    )
