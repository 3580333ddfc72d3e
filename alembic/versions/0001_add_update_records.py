"""add update records

Revision ID: 0001_add_update_records
Revises:
Create Date: 2026-10-19 12:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_add_update_records'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'update_records',
        sa.Column('pk', sa.Integer(), nullable=False),
        sa.Column('devicename', sa.String(length=100), nullable=False),
        sa.Column('romtype', sa.String(length=50), nullable=False),
        sa.Column('datetime', sa.BigInteger(), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('size', sa.BigInteger(), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('version', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('pk')
    )
    op.create_index('ix_update_records_devicename_romtype', 'update_records', ['devicename', 'romtype'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_update_records_devicename_romtype', table_name='update_records')
    op.drop_table('update_records')
