"""Add available_bonus_points to users.

Revision ID: c3d4e5f6a7b8
Revises: b2c3d4e5f6a7
Create Date: 2026-10-01
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c3d4e5f6a7b8'
down_revision = 'b2c3d4e5f6a7'
branch_labels = None
depends_on = None


def upgrade():
    op.add_column('users', sa.Column('available_bonus_points', sa.Integer(), nullable=False, server_default='0'))


def downgrade():
    op.drop_column('users', 'available_bonus_points')
