"""add_catalog_tag_tables

Revision ID: 4c1d2e7a9b30
Revises:
Create Date: 2026-10-18 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d2e7a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create catalog items, tags, item-tag mappings, url records, store mappings and ACL records."""
    op.create_table('catalog_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=400), nullable=False),
        sa.Column('published', sa.Boolean(), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False),
        sa.Column('limited_to_stores', sa.Boolean(), nullable=False),
        sa.Column('subject_to_acl', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    # Unique tag names back the insert-or-fetch in tag creation
    op.create_table('tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=400), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table('item_tags',
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.Column('attached_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['catalog_items.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('item_id', 'tag_id'),
    )
    op.create_index('ix_item_tags_tag_id', 'item_tags', ['tag_id'], unique=False)

    op.create_table('url_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('entity_name', sa.String(length=400), nullable=False),
        sa.Column('slug', sa.String(length=400), nullable=False),
        sa.Column('language_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_url_records_slug', 'url_records', ['slug'], unique=False)
    op.create_index('ix_url_records_entity', 'url_records', ['entity_name', 'entity_id', 'language_id'], unique=False)

    op.create_table('store_mappings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('entity_name', sa.String(length=400), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('entity_name', 'entity_id', 'store_id', name='uq_store_mapping'),
    )
    op.create_index('ix_store_mappings_entity_name', 'store_mappings', ['entity_name'], unique=False)

    op.create_table('acl_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('entity_name', sa.String(length=400), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('customer_role_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('entity_name', 'entity_id', 'customer_role_id', name='uq_acl_record'),
    )
    op.create_index('ix_acl_records_entity_name', 'acl_records', ['entity_name'], unique=False)


def downgrade() -> None:
    """Drop catalog tag tables."""
    op.drop_index('ix_acl_records_entity_name', table_name='acl_records')
    op.drop_table('acl_records')
    op.drop_index('ix_store_mappings_entity_name', table_name='store_mappings')
    op.drop_table('store_mappings')
    op.drop_index('ix_url_records_entity', table_name='url_records')
    op.drop_index('ix_url_records_slug', table_name='url_records')
    op.drop_table('url_records')
    op.drop_index('ix_item_tags_tag_id', table_name='item_tags')
    op.drop_table('item_tags')
    op.drop_table('tags')
    op.drop_table('catalog_items')
