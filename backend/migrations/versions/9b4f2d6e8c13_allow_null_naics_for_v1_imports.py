"""allow_null_naics_for_v1_imports

Revision ID: 9b4f2d6e8c13
Revises: 5c1e0b7d2a94
Create Date: 2026-10-19 15:41:07.532806

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '9b4f2d6e8c13'
down_revision = '5c1e0b7d2a94'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Version 1 exports had no NAICS field
    with op.batch_alter_table('subgrants') as batch_op:
        batch_op.alter_column('naics_code', existing_type=sa.String(length=6), nullable=True)


def downgrade() -> None:
    # Fails while any version 1 subgrant still has no code
    with op.batch_alter_table('subgrants') as batch_op:
        batch_op.alter_column('naics_code', existing_type=sa.String(length=6), nullable=False)
