"""create_tracker_tables

Revision ID: 5c1e0b7d2a94
Revises:
Create Date: 2026-10-19 09:12:40.118302

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5c1e0b7d2a94'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    user_role_enum = sa.Enum('MEMBER', 'ADMIN', name='userrole')

    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('role', user_role_enum, nullable=False, server_default='MEMBER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('refresh_token', sa.String(length=512), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('refresh_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_used_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sessions_id'), 'sessions', ['id'], unique=False)
    op.create_index(op.f('ix_sessions_user_id'), 'sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_sessions_token'), 'sessions', ['token'], unique=True)
    op.create_index(op.f('ix_sessions_refresh_token'), 'sessions', ['refresh_token'], unique=True)

    op.create_table('contracts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('tad_project_number', sa.String(length=100), nullable=False),
        sa.Column('contract_number', sa.String(length=100), nullable=False),
        sa.Column('prime_contractor', sa.String(length=255), nullable=False),
        sa.Column('original_amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('dbe_percentage', sa.Numeric(precision=5, scale=2), nullable=False, server_default='0'),
        sa.Column('award_date', sa.Date(), nullable=True),
        sa.Column('report_date', sa.Date(), nullable=True),
        sa.Column('final_report', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('schema_version', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('original_amount >= 0', name='ck_contracts_original_amount_non_negative'),
        sa.CheckConstraint('dbe_percentage >= 0 AND dbe_percentage <= 100', name='ck_contracts_dbe_percentage_range'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_contracts_tad_project_number'), 'contracts', ['tad_project_number'], unique=False)
    op.create_index(op.f('ix_contracts_contract_number'), 'contracts', ['contract_number'], unique=False)
    op.create_index(op.f('ix_contracts_created_by'), 'contracts', ['created_by'], unique=False)

    op.create_table('subgrants',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('contract_id', sa.String(length=36), nullable=False),
        sa.Column('dbe_firm_name', sa.String(length=255), nullable=False),
        sa.Column('naics_code', sa.String(length=6), nullable=False),
        sa.Column('contract_type', sa.String(length=50), nullable=False, server_default='Subcontract'),
        sa.Column('certified_dbe', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('ethnicity_gender', sa.String(length=100), nullable=True),
        sa.Column('amount', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('award_date', sa.Date(), nullable=True),
        sa.Column('schema_version', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('amount >= 0', name='ck_subgrants_amount_non_negative'),
        sa.ForeignKeyConstraint(['contract_id'], ['contracts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_subgrants_contract_id'), 'subgrants', ['contract_id'], unique=False)
    op.create_index(op.f('ix_subgrants_created_by'), 'subgrants', ['created_by'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_subgrants_created_by'), table_name='subgrants')
    op.drop_index(op.f('ix_subgrants_contract_id'), table_name='subgrants')
    op.drop_table('subgrants')

    op.drop_index(op.f('ix_contracts_created_by'), table_name='contracts')
    op.drop_index(op.f('ix_contracts_contract_number'), table_name='contracts')
    op.drop_index(op.f('ix_contracts_tad_project_number'), table_name='contracts')
    op.drop_table('contracts')

    op.drop_index(op.f('ix_sessions_refresh_token'), table_name='sessions')
    op.drop_index(op.f('ix_sessions_token'), table_name='sessions')
    op.drop_index(op.f('ix_sessions_user_id'), table_name='sessions')
    op.drop_index(op.f('ix_sessions_id'), table_name='sessions')
    op.drop_table('sessions')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
