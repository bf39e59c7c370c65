"""Track bonus points credited per order.

Revision ID: e5f6a7b8c9d0
Revises: d4e5f6a7b8c9
Create Date: 2026-10-03
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'e5f6a7b8c9d0'
down_revision = 'd4e5f6a7b8c9'
branch_labels = None
depends_on = None


def upgrade():
    op.add_column('orders', sa.Column('bonus_points_credited', sa.Integer(), nullable=True))
    op.add_column('orders', sa.Column('bonus_points_credited_at', sa.DateTime(), nullable=True))


def downgrade():
    op.drop_column('orders', 'bonus_points_credited_at')
    op.drop_column('orders', 'bonus_points_credited')
