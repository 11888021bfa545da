"""Create catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    """Create lookup, product, variant and collection membership tables."""
    # Lookup tables
    op.create_table(
        'brands',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('logo', sa.String(1000), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'product_types',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        'colors',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('hex_code', sa.String(20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'styles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column(
            'fit_type',
            sa.Enum('SKINNY', 'RELAXED', 'OVERSIZED', 'CLASSIC', name='fit_type', native_enum=False, length=20),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        'collections',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )

    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(500), nullable=False, unique=True),
        sa.Column('sku', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=False, index=True),
        sa.Column('discounted_price', sa.Float(), nullable=True),
        sa.Column('formatted_price', sa.String(50), nullable=True),
        sa.Column('formatted_discounted_price', sa.String(50), nullable=True),
        sa.Column('price_per_unit', sa.Float(), nullable=True),
        sa.Column('formatted_price_per_unit', sa.String(50), nullable=True),
        sa.Column('currency', sa.String(3), nullable=False, server_default='USD'),
        sa.Column('quantity_in_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default='true', index=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('track_inventory', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('manage_variants', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('product_page_url', sa.String(1000), nullable=True),
        sa.Column('seo_title', sa.String(500), nullable=True),
        sa.Column('seo_description', sa.Text(), nullable=True),
        sa.Column('seo_keywords', sa.Text(), nullable=True),
        sa.Column('main_media', sa.String(1000), nullable=True),
        sa.Column('media_items', postgresql.JSONB(), nullable=True),
        sa.Column('additional_info_sections', postgresql.JSONB(), nullable=True),
        sa.Column('custom_text_fields', postgresql.JSONB(), nullable=True),
        sa.Column('product_options', postgresql.JSONB(), nullable=True),
        sa.Column('ribbons', postgresql.JSONB(), nullable=True),
        sa.Column('discount', postgresql.JSONB(), nullable=True),
        sa.Column('brand_id', sa.String(36),
                  sa.ForeignKey('brands.id', ondelete='RESTRICT'), nullable=True, index=True),
        sa.Column('product_type_id', sa.String(36),
                  sa.ForeignKey('product_types.id', ondelete='SET NULL'), nullable=True, index=True),
        *_timestamps(),
    )

    # Product variants table
    op.create_table(
        'product_variants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('variant_id', sa.String(100), nullable=False, unique=True),
        sa.Column('sku', sa.String(100), nullable=False, unique=True),
        sa.Column('full_variant_name', sa.String(500), nullable=False),
        sa.Column('variant_name', sa.String(200), nullable=False),
        sa.Column('choices', postgresql.JSONB(), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0', index=True),
        sa.Column('managed_variant', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('variant_media', postgresql.JSONB(), nullable=True),
        sa.Column('product_id', sa.String(36),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('color_id', sa.String(36),
                  sa.ForeignKey('colors.id', ondelete='RESTRICT'), nullable=True, index=True),
        sa.Column('style_id', sa.String(36),
                  sa.ForeignKey('styles.id', ondelete='RESTRICT'), nullable=True, index=True),
        *_timestamps(),
    )

    # Collection membership
    op.create_table(
        'product_collections',
        sa.Column('product_id', sa.String(36),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('collection_id', sa.String(36),
                  sa.ForeignKey('collections.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'variant_collections',
        sa.Column('variant_id', sa.String(36),
                  sa.ForeignKey('product_variants.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('collection_id', sa.String(36),
                  sa.ForeignKey('collections.id', ondelete='CASCADE'), primary_key=True),
    )


def downgrade() -> None:
    """Drop catalog tables."""
    op.drop_table('variant_collections')
    op.drop_table('product_collections')
    op.drop_table('product_variants')
    op.drop_table('products')
    op.drop_table('collections')
    op.drop_table('styles')
    op.drop_table('colors')
    op.drop_table('product_types')
    op.drop_table('brands')
