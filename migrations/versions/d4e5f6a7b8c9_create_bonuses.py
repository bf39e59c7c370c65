"""Create bonuses, bonus_images and bonus_slugs tables.

Revision ID: d4e5f6a7b8c9
Revises: c3d4e5f6a7b8
Create Date: 2026-10-02
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'd4e5f6a7b8c9'
down_revision = 'c3d4e5f6a7b8'
branch_labels = None
depends_on = None


def upgrade():
    """Create the bonus catalog tables."""
    op.create_table(
        'bonuses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('available_on', sa.DateTime(), nullable=True),
        sa.Column('discontinue_on', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('slug', sa.String(255), nullable=True),
        sa.Column('count_on_hand', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('index_bonuses_on_available_on', 'bonuses', ['available_on'])
    op.create_index('index_bonuses_on_deleted_at', 'bonuses', ['deleted_at'])
    op.create_index('index_bonuses_on_name', 'bonuses', ['name'])
    op.create_index('index_bonuses_on_slug', 'bonuses', ['slug'], unique=True)

    op.create_table(
        'bonus_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('bonus_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('url', sa.String(1024), nullable=False),
        sa.Column('alt', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['bonus_id'], ['bonuses.id'], ondelete='CASCADE'),
    )

    op.create_table(
        'bonus_slugs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('bonus_id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['bonus_id'], ['bonuses.id'], ondelete='CASCADE'),
    )
    op.create_index('index_bonus_slugs_on_slug', 'bonus_slugs', ['slug'])


def downgrade():
    """Drop the bonus catalog tables."""
    op.drop_index('index_bonus_slugs_on_slug', table_name='bonus_slugs')
    op.drop_table('bonus_slugs')
    op.drop_table('bonus_images')
    op.drop_index('index_bonuses_on_slug', table_name='bonuses')
    op.drop_index('index_bonuses_on_name', table_name='bonuses')
    op.drop_index('index_bonuses_on_deleted_at', table_name='bonuses')
    op.drop_index('index_bonuses_on_available_on', table_name='bonuses')
    op.drop_table('bonuses')
