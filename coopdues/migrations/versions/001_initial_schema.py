"""Create member, cooperative and dues tables.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-12-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create registry and ledger tables."""
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('tc_number', sa.String(11), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('phone_1', sa.String(20), nullable=False),
        sa.Column('phone_2', sa.String(20), nullable=True),
        sa.Column('registration_date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tc_number'),
    )
    op.create_index('ix_members_full_name', 'members', ['full_name'])

    op.create_table(
        'cooperatives',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'cooperative_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('coop_id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.ForeignKeyConstraint(['coop_id'], ['cooperatives.id'], ),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('coop_id', 'member_id', name='uq_coop_member'),
    )
    op.create_index('ix_cooperative_members_coop_id', 'cooperative_members', ['coop_id'])
    op.create_index('ix_cooperative_members_member_id', 'cooperative_members', ['member_id'])

    op.create_table(
        'dues',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('coop_member_id', sa.Integer(), nullable=False),
        sa.Column('period', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('kind', sa.Enum('SCHEDULED', 'EXTRA', name='duekind'), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['coop_member_id'], ['cooperative_members.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_dues_coop_member_id', 'dues', ['coop_member_id'])
    op.create_index('idx_due_member_period', 'dues', ['coop_member_id', 'period'])
    op.create_index('idx_due_member_kind_period', 'dues', ['coop_member_id', 'kind', 'period'])


def downgrade() -> None:
    """Drop registry and ledger tables."""
    op.drop_table('dues')
    op.drop_table('cooperative_members')
    op.drop_table('cooperatives')
    op.drop_table('members')
