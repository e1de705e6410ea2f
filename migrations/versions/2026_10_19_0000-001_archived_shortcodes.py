"""Create archived_shortcodes table

Revision ID: 001_archived_shortcodes
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_archived_shortcodes'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the archived_shortcodes table holding each shortener's ranked
    shortcode catalog.
    """
    bind = op.get_bind()
    if 'archived_shortcodes' in inspect(bind).get_table_names():
        return

    op.create_table(
        'archived_shortcodes',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('shortener', sa.String(length=50), nullable=False),
        sa.Column('shortcode', sa.String(length=255), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=False),
        sa.Column('is_vanity', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('fetched_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shortener', 'shortcode', name='uq_archived_shortcodes_shortener_shortcode'),
    )
    op.create_index(
        'ix_archived_shortcodes_shortener_rank',
        'archived_shortcodes',
        ['shortener', 'rank']
    )
    op.create_index(
        'ix_archived_shortcodes_fetched_at',
        'archived_shortcodes',
        ['fetched_at']
    )


def downgrade() -> None:
    op.drop_index('ix_archived_shortcodes_fetched_at', table_name='archived_shortcodes')
    op.drop_index('ix_archived_shortcodes_shortener_rank', table_name='archived_shortcodes')
    op.drop_table('archived_shortcodes')
