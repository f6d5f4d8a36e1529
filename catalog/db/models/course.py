import uuid
from sqlalchemy import Boolean, Column, String, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from .base import Base, CatalogKind, now_utc


class Course(Base):
    __tablename__ = 'courses'
    kind = CatalogKind.COURSE

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    topic = Column(String(128), nullable=False)
    short_description = Column(String(255), nullable=False)
    long_description = Column(Text, nullable=True)
    tags = Column(JSONB, nullable=True)
    access_duration = Column(Integer, nullable=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    uploaded_image_amount = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    images = relationship(
        "Image",
        primaryjoin="and_(Course.id == foreign(Image.owner_id), Image.owner_type == 'course')",
        order_by="Image.created_at",
        viewonly=True,
    )
    course_parts = relationship("CoursePart", back_populates="course", order_by="CoursePart.number")

    __table_args__ = (
        Index('idx_courses_deleted_at', 'deleted_at'),
        Index('idx_courses_in_stock', 'in_stock'),
    )
