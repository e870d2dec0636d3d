"""create extraction_records and operation_logs tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'extraction_records',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('error_message', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_extraction_records_url'), 'extraction_records', ['url'], unique=True)
    op.create_index(op.f('ix_extraction_records_status'), 'extraction_records', ['status'])

    op.create_table(
        'operation_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('url', sa.String(), nullable=False),
        sa.Column('extraction_id', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('event', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('duration_ms', sa.Integer(), nullable=True),
        sa.Column('stack_trace', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_operation_logs_url'), 'operation_logs', ['url'])
    op.create_index(op.f('ix_operation_logs_extraction_id'), 'operation_logs', ['extraction_id'])


def downgrade() -> None:
    op.drop_index(op.f('ix_operation_logs_extraction_id'), table_name='operation_logs')
    op.drop_index(op.f('ix_operation_logs_url'), table_name='operation_logs')
    op.drop_table('operation_logs')
    op.drop_index(op.f('ix_extraction_records_status'), table_name='extraction_records')
    op.drop_index(op.f('ix_extraction_records_url'), table_name='extraction_records')
    op.drop_table('extraction_records')
