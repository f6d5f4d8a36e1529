import uuid
from sqlalchemy import Column, String, DateTime, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from .base import Base, now_utc


class Image(Base):
    """Image metadata attached to one owner; one row per (owner, media) pair."""

    __tablename__ = 'images'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    url = Column(Text, nullable=False)
    secure_url = Column(Text, nullable=False)
    public_id = Column(String(255), nullable=False)
    media_service_id = Column(UUID(as_uuid=True), nullable=False)
    owner_id = Column(UUID(as_uuid=True), nullable=False)
    owner_type = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    __table_args__ = (
        Index('idx_images_owner', 'owner_id', 'owner_type'),
        Index('idx_images_media_service_id', 'media_service_id'),
        Index('uq_images_owner_media', 'owner_id', 'owner_type', 'media_service_id', unique=True),
    )
