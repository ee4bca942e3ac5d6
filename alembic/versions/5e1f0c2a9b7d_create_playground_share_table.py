"""create playground_share table

Revision ID: 5e1f0c2a9b7d
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5e1f0c2a9b7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One JSON document (as text) per share created by the db store provider
    op.create_table(
        'playground_share',
        sa.Column('share_id', sa.Text(), nullable=False),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('share_id'),
        schema='public'
    )
    # Retention job deletes by age
    op.create_index(
        'ix_playground_share_created_at',
        'playground_share',
        ['created_at'],
        schema='public'
    )


def downgrade() -> None:
    op.drop_index('ix_playground_share_created_at', table_name='playground_share', schema='public')
    op.drop_table('playground_share', schema='public')
