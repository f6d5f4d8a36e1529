"""Initial catalog schema

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2025-10-02 10:12:44.318209

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def _entity_columns():
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('short_description', sa.String(length=255), nullable=False),
        sa.Column('long_description', sa.Text(), nullable=True),
        sa.Column('tags', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('uploaded_image_amount', sa.Integer(), nullable=False, server_default='0'),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'courses',
        *_entity_columns(),
        sa.Column('topic', sa.String(length=128), nullable=False),
        sa.Column('access_duration', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_courses_deleted_at', 'courses', ['deleted_at'])
    op.create_index('idx_courses_in_stock', 'courses', ['in_stock'])

    op.create_table(
        'seminars',
        *_entity_columns(),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ending_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('place', sa.String(length=255), nullable=False),
        sa.Column('late_payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('reservation_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('early_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('late_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('early_surcharge_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('late_surcharge_product_id', postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_seminars_deleted_at', 'seminars', ['deleted_at'])
    op.create_index('idx_seminars_date', 'seminars', ['date'])

    op.create_table(
        'training_sessions',
        *_entity_columns(),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('format', sa.String(length=16), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_training_sessions_deleted_at', 'training_sessions', ['deleted_at'])

    op.create_table(
        'physical_goods',
        *_entity_columns(),
        sa.Column('amount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('shipping_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_physical_goods_deleted_at', 'physical_goods', ['deleted_at'])

    op.create_table(
        'course_parts',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('course_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('short_description', sa.String(length=255), nullable=False),
        sa.Column('long_description', sa.Text(), nullable=True),
        sa.Column('tags', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_course_parts_course_id', 'course_parts', ['course_id'])
    op.create_index('idx_course_parts_course_number', 'course_parts', ['course_id', 'number'])

    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('details_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('details_type', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_products_details', 'products', ['details_id', 'details_type'])
    op.create_index('idx_products_deleted_at', 'products', ['deleted_at'])

    op.create_table(
        'images',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('secure_url', sa.Text(), nullable=False),
        sa.Column('public_id', sa.String(length=255), nullable=False),
        sa.Column('media_service_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('owner_type', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_images_owner', 'images', ['owner_id', 'owner_type'])
    op.create_index('idx_images_media_service_id', 'images', ['media_service_id'])
    op.create_index('uq_images_owner_media', 'images', ['owner_id', 'owner_type', 'media_service_id'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_images_owner_media', table_name='images')
    op.drop_index('idx_images_media_service_id', table_name='images')
    op.drop_index('idx_images_owner', table_name='images')
    op.drop_table('images')
    op.drop_index('idx_products_deleted_at', table_name='products')
    op.drop_index('idx_products_details', table_name='products')
    op.drop_table('products')
    op.drop_index('idx_course_parts_course_number', table_name='course_parts')
    op.drop_index('idx_course_parts_course_id', table_name='course_parts')
    op.drop_table('course_parts')
    op.drop_index('idx_physical_goods_deleted_at', table_name='physical_goods')
    op.drop_table('physical_goods')
    op.drop_index('idx_training_sessions_deleted_at', table_name='training_sessions')
    op.drop_table('training_sessions')
    op.drop_index('idx_seminars_date', table_name='seminars')
    op.drop_index('idx_seminars_deleted_at', table_name='seminars')
    op.drop_table('seminars')
    op.drop_index('idx_courses_in_stock', table_name='courses')
    op.drop_index('idx_courses_deleted_at', table_name='courses')
    op.drop_table('courses')
