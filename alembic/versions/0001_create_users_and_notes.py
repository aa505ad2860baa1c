"""Create users and notes tables

Revision ID: 0001
Revises:
Create Date: 2025-10-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from notekeeper.core.models.types import GUID, UTCDateTime


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', UTCDateTime(), nullable=False),
        sa.Column('updated_at', UTCDateTime(), nullable=False),
    )
    op.create_index('idx_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'notes',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('owner_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.JSON(none_as_null=True), nullable=True),
        sa.Column('created_at', UTCDateTime(), nullable=False),
        sa.Column('updated_at', UTCDateTime(), nullable=False),
    )
    op.create_index('idx_notes_owner_id', 'notes', ['owner_id'])
    op.create_index('idx_notes_owner_updated', 'notes', ['owner_id', 'updated_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_owner_updated', table_name='notes')
    op.drop_index('idx_notes_owner_id', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_users_username', table_name='users')
    op.drop_table('users')
