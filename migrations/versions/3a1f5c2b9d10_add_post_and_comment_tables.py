"""add post and comment tables

Revision ID: 3a1f5c2b9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from crudkit.utils.settings import get_settings

# revision identifiers, used by Alembic.
revision: str = '3a1f5c2b9d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    prefix = get_settings().table_prefix
    op.create_table(
        f'{prefix}post',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.String(length=255), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        f'{prefix}comment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('content', sa.String(length=255), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=True),
        sa.Column('post_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['post_id'], [f'{prefix}post.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(f'ix_{prefix}comment_post_id', f'{prefix}comment', ['post_id'], unique=False)


def downgrade() -> None:
    prefix = get_settings().table_prefix
    op.drop_index(f'ix_{prefix}comment_post_id', table_name=f'{prefix}comment')
    op.drop_table(f'{prefix}comment')
    op.drop_table(f'{prefix}post')
