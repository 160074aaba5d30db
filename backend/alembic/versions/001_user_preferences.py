"""Create user_preferences table.

Revision ID: 001_user_preferences
Revises:
Create Date: 2026-10-19

One row per user, unique on user_id. Content columns are nullable so a
partial first write stores only the supplied fields.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_user_preferences'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column('favorite_teams', sa.JSON(), nullable=True),
        sa.Column('notifications', sa.Boolean(), nullable=True),
        sa.Column('theme', sa.String(10), nullable=True),
        sa.Column('measurement_units', sa.String(10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_user_preferences_user_id', 'user_preferences', ['user_id'],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index('ix_user_preferences_user_id', 'user_preferences')
    op.drop_table('user_preferences')
