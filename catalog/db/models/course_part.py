import uuid
from sqlalchemy import Boolean, Column, String, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class CoursePart(Base):
    __tablename__ = 'course_parts'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey('courses.id', ondelete='CASCADE'), nullable=False)
    number = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    short_description = Column(String(255), nullable=False)
    long_description = Column(Text, nullable=True)
    tags = Column(JSONB, nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    course = relationship("Course", back_populates="course_parts")

    __table_args__ = (
        Index('idx_course_parts_course_id', 'course_id'),
        Index('idx_course_parts_course_number', 'course_id', 'number'),
    )
