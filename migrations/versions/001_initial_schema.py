"""Initial schema with orders and jobs

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('order_received', sa.DateTime(), nullable=False),
        sa.Column('order_ready', sa.DateTime(), nullable=True),
        sa.Column('order_retrieved', sa.DateTime(), nullable=True),
        sa.Column('order_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('order_brewed', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('order_size >= 0', name='ck_orders_size_non_negative'),
        sa.CheckConstraint(
            'order_brewed >= 0 AND order_brewed <= order_size',
            name='ck_orders_brewed_within_size',
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_order_received'), 'orders', ['order_received'], unique=False)

    # Create jobs table (one row per cup)
    op.create_table(
        'jobs',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('order_id', sa.String(length=50), nullable=False),
        sa.Column('product', sa.String(length=255), nullable=False),
        sa.Column('order_received', sa.DateTime(), nullable=False),
        sa.Column('machine', sa.String(length=255), nullable=True),
        sa.Column('job_started', sa.DateTime(), nullable=True),
        sa.Column('job_ready', sa.DateTime(), nullable=True),
        sa.Column('job_retrieved', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_jobs_order_id'), 'jobs', ['order_id'], unique=False)
    op.create_index(op.f('ix_jobs_job_retrieved'), 'jobs', ['job_retrieved'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_jobs_job_retrieved'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_order_id'), table_name='jobs')
    op.drop_table('jobs')
    op.drop_index(op.f('ix_orders_order_received'), table_name='orders')
    op.drop_table('orders')
