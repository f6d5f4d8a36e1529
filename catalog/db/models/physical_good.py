import uuid
from sqlalchemy import Boolean, Column, String, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from .base import Base, CatalogKind, now_utc


class PhysicalGood(Base):
    __tablename__ = 'physical_goods'
    kind = CatalogKind.PHYSICAL_GOOD

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    short_description = Column(String(255), nullable=False)
    long_description = Column(Text, nullable=True)
    tags = Column(JSONB, nullable=True)
    amount = Column(Integer, nullable=False, default=0)
    shipping_required = Column(Boolean, nullable=False, default=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    uploaded_image_amount = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    images = relationship(
        "Image",
        primaryjoin="and_(PhysicalGood.id == foreign(Image.owner_id), Image.owner_type == 'physical_good')",
        order_by="Image.created_at",
        viewonly=True,
    )

    __table_args__ = (
        Index('idx_physical_goods_deleted_at', 'deleted_at'),
    )
