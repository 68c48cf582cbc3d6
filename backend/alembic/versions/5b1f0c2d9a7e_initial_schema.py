"""Initial schema: users, folders, tags, notes and note_tags

Revision ID: 5b1f0c2d9a7e
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from noteful.core.models.types import GUID


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d9a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('length(username) <= 20', name='ck_users_username_len'),
        sa.CheckConstraint('length(full_name) <= 100', name='ck_users_full_name_len'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index('idx_users_username', 'users', ['username'])

    op.create_table(
        'folders',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', GUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'name', name='uq_folders_owner_name'),
    )
    op.create_index('idx_folders_owner_id', 'folders', ['owner_id'])

    op.create_table(
        'tags',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('owner_id', GUID(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'name', name='uq_tags_owner_name'),
    )
    op.create_index('idx_tags_owner_id', 'tags', ['owner_id'])

    op.create_table(
        'notes',
        sa.Column('id', GUID(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('owner_id', GUID(), nullable=False),
        sa.Column('folder_id', GUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['folder_id'], ['folders.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_owner_id', 'notes', ['owner_id'])
    op.create_index('idx_notes_folder_id', 'notes', ['folder_id'])
    op.create_index('idx_notes_owner_updated', 'notes', ['owner_id', 'updated_at'])

    op.create_table(
        'note_tags',
        sa.Column('note_id', GUID(), nullable=False),
        sa.Column('tag_id', GUID(), nullable=False),
        sa.ForeignKeyConstraint(['note_id'], ['notes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('note_id', 'tag_id'),
    )
    op.create_index('idx_note_tags_tag_id', 'note_tags', ['tag_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_note_tags_tag_id', table_name='note_tags')
    op.drop_table('note_tags')
    op.drop_index('idx_notes_owner_updated', table_name='notes')
    op.drop_index('idx_notes_folder_id', table_name='notes')
    op.drop_index('idx_notes_owner_id', table_name='notes')
    op.drop_table('notes')
    op.drop_index('idx_tags_owner_id', table_name='tags')
    op.drop_table('tags')
    op.drop_index('idx_folders_owner_id', table_name='folders')
    op.drop_table('folders')
    op.drop_index('idx_users_username', table_name='users')
    op.drop_table('users')
