import uuid
from sqlalchemy import Boolean, Column, String, DateTime, Float, Index
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class Product(Base):
    __tablename__ = 'products'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    price = Column(Float, nullable=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    # Polymorphic back-reference: details_type names the owning entity table.
    details_id = Column(UUID(as_uuid=True), nullable=False)
    details_type = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('idx_products_details', 'details_id', 'details_type'),
        Index('idx_products_deleted_at', 'deleted_at'),
    )
