"""Initial ledger schema.

Revision ID: 20261017_000001
Revises:
Create Date: 2026-10-17

Accounts, referral edges, investments with payment proofs, scheduled
earnings, commission ledger and rate table, bank details, withdrawals
and withdrawal settings.
"""

from datetime import UTC, datetime

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261017_000001'
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.DECIMAL(precision=12, scale=2)
PERCENT = sa.DECIMAL(precision=5, scale=2)

INVESTMENT_STATUSES = (
    "'pending_proof', 'pending_approval', 'active', "
    "'completed', 'rejected', 'cancelled'"
)
WITHDRAWAL_STATUSES = (
    "'pending', 'processing', 'completed', 'rejected', 'cancelled'"
)


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if with_updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False)
        )
    return columns


def upgrade() -> None:
    """Create ledger tables."""
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('referral_code', sa.String(length=20), nullable=False),
        sa.Column('referrer_code', sa.String(length=20), nullable=True),
        sa.Column('direct_referrals', sa.Integer(), nullable=False),
        sa.Column('first_activation_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('first_investment_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            'direct_referrals >= 0 AND direct_referrals <= 10',
            name=op.f('ck_accounts_direct_referrals_range'),
        ),
        sa.CheckConstraint(
            "role IN ('admin', 'agent')",
            name=op.f('ck_accounts_role_valid'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_accounts')),
    )
    op.create_index(
        op.f('ix_accounts_referral_code'), 'accounts', ['referral_code'], unique=True
    )
    op.create_index(
        op.f('ix_accounts_referrer_code'), 'accounts', ['referrer_code'], unique=False
    )

    op.create_table(
        'referral_edges',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ancestor_id', sa.Integer(), nullable=False),
        sa.Column('descendant_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        *_timestamps(with_updated=False),
        sa.CheckConstraint(
            'level >= 1 AND level <= 10',
            name=op.f('ck_referral_edges_level_range'),
        ),
        sa.CheckConstraint(
            'ancestor_id <> descendant_id',
            name=op.f('ck_referral_edges_no_self_edge'),
        ),
        sa.ForeignKeyConstraint(
            ['ancestor_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_referral_edges_ancestor_id_accounts'),
        ),
        sa.ForeignKeyConstraint(
            ['descendant_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_referral_edges_descendant_id_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_referral_edges')),
        sa.UniqueConstraint(
            'descendant_id', 'level',
            name=op.f('uq_referral_edges_descendant_id'),
        ),
    )
    op.create_index(
        op.f('ix_referral_edges_ancestor_id'), 'referral_edges', ['ancestor_id']
    )
    op.create_index(
        op.f('ix_referral_edges_descendant_id'), 'referral_edges', ['descendant_id']
    )
    op.create_index(
        'idx_referral_edges_ancestor_level', 'referral_edges', ['ancestor_id', 'level']
    )

    op.create_table(
        'investments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('decided_by', sa.Integer(), nullable=True),
        sa.Column('decided_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name=op.f('ck_investments_amount_positive')),
        sa.CheckConstraint(
            f'status IN ({INVESTMENT_STATUSES})',
            name=op.f('ck_investments_status_valid'),
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_investments_owner_id_accounts'),
        ),
        sa.ForeignKeyConstraint(
            ['decided_by'], ['accounts.id'], ondelete='SET NULL',
            name=op.f('fk_investments_decided_by_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_investments')),
    )
    op.create_index(op.f('ix_investments_owner_id'), 'investments', ['owner_id'])
    op.create_index(op.f('ix_investments_status'), 'investments', ['status'])
    op.create_index(
        'idx_investments_status_end_date', 'investments', ['status', 'end_date']
    )

    op.create_table(
        'payment_proofs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('investment_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('file_type', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name=op.f('ck_payment_proofs_status_valid'),
        ),
        sa.ForeignKeyConstraint(
            ['investment_id'], ['investments.id'], ondelete='CASCADE',
            name=op.f('fk_payment_proofs_investment_id_investments'),
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_payment_proofs_owner_id_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_payment_proofs')),
    )
    op.create_index(
        op.f('ix_payment_proofs_investment_id'), 'payment_proofs', ['investment_id']
    )
    op.create_index(op.f('ix_payment_proofs_owner_id'), 'payment_proofs', ['owner_id'])

    op.create_table(
        'earnings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('investment_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('payout_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(with_updated=False),
        sa.CheckConstraint('amount > 0', name=op.f('ck_earnings_amount_positive')),
        sa.CheckConstraint(
            "status IN ('pending', 'paid')",
            name=op.f('ck_earnings_status_valid'),
        ),
        sa.ForeignKeyConstraint(
            ['investment_id'], ['investments.id'], ondelete='CASCADE',
            name=op.f('fk_earnings_investment_id_investments'),
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_earnings_owner_id_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_earnings')),
        sa.UniqueConstraint(
            'investment_id', 'payout_date',
            name=op.f('uq_earnings_investment_id'),
        ),
    )
    op.create_index(op.f('ix_earnings_investment_id'), 'earnings', ['investment_id'])
    op.create_index(op.f('ix_earnings_owner_id'), 'earnings', ['owner_id'])
    op.create_index(op.f('ix_earnings_payout_date'), 'earnings', ['payout_date'])
    op.create_index('idx_earnings_owner_status', 'earnings', ['owner_id', 'status'])

    op.create_table(
        'commission_records',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ancestor_id', sa.Integer(), nullable=False),
        sa.Column('descendant_id', sa.Integer(), nullable=False),
        sa.Column('investment_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('base_amount', MONEY, nullable=False),
        sa.Column('commission_rate', PERCENT, nullable=False),
        sa.Column('commission_amount', MONEY, nullable=False),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'level >= 1 AND level <= 10',
            name=op.f('ck_commission_records_level_range'),
        ),
        sa.CheckConstraint(
            'commission_amount >= 0',
            name=op.f('ck_commission_records_amount_non_negative'),
        ),
        sa.ForeignKeyConstraint(
            ['ancestor_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_commission_records_ancestor_id_accounts'),
        ),
        sa.ForeignKeyConstraint(
            ['descendant_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_commission_records_descendant_id_accounts'),
        ),
        sa.ForeignKeyConstraint(
            ['investment_id'], ['investments.id'], ondelete='CASCADE',
            name=op.f('fk_commission_records_investment_id_investments'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_commission_records')),
        sa.UniqueConstraint(
            'ancestor_id', 'descendant_id', 'investment_id', 'level',
            name=op.f('uq_commission_records_ancestor_id'),
        ),
    )
    op.create_index(
        op.f('ix_commission_records_ancestor_id'), 'commission_records', ['ancestor_id']
    )
    op.create_index(
        op.f('ix_commission_records_descendant_id'),
        'commission_records',
        ['descendant_id'],
    )
    op.create_index(
        op.f('ix_commission_records_investment_id'),
        'commission_records',
        ['investment_id'],
    )

    op.create_table(
        'commission_rates',
        sa.Column('level', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('rate', PERCENT, nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'level >= 1 AND level <= 10',
            name=op.f('ck_commission_rates_level_range'),
        ),
        sa.CheckConstraint(
            'rate >= 0 AND rate <= 100',
            name=op.f('ck_commission_rates_rate_range'),
        ),
        sa.PrimaryKeyConstraint('level', name=op.f('pk_commission_rates')),
    )
    seeded_at = datetime.now(UTC)
    op.bulk_insert(
        sa.table(
            'commission_rates',
            sa.column('level', sa.Integer()),
            sa.column('rate', PERCENT),
            sa.column('updated_at', sa.DateTime(timezone=True)),
        ),
        [
            {'level': level, 'rate': rate, 'updated_at': seeded_at}
            for level, rate in (
                (1, 10), (2, 8), (3, 6), (4, 4), (5, 2),
                (6, 2), (7, 2), (8, 2), (9, 2), (10, 2),
            )
        ],
    )

    op.create_table(
        'bank_details',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('account_holder_name', sa.String(length=255), nullable=False),
        sa.Column('account_number', sa.String(length=34), nullable=False),
        sa.Column('ifsc_code', sa.String(length=11), nullable=False),
        sa.Column('bank_name', sa.String(length=255), nullable=False),
        sa.Column('branch_name', sa.String(length=255), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_bank_details_owner_id_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_bank_details')),
    )
    op.create_index(
        op.f('ix_bank_details_owner_id'), 'bank_details', ['owner_id'], unique=True
    )

    op.create_table(
        'withdrawals',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('bank_details_id', sa.Integer(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('fee_amount', MONEY, nullable=False),
        sa.Column('net_amount', MONEY, nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('processed_by', sa.Integer(), nullable=True),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name=op.f('ck_withdrawals_amount_positive')),
        sa.CheckConstraint(
            'fee_amount >= 0', name=op.f('ck_withdrawals_fee_non_negative')
        ),
        sa.CheckConstraint(
            f'status IN ({WITHDRAWAL_STATUSES})',
            name=op.f('ck_withdrawals_status_valid'),
        ),
        sa.ForeignKeyConstraint(
            ['owner_id'], ['accounts.id'], ondelete='CASCADE',
            name=op.f('fk_withdrawals_owner_id_accounts'),
        ),
        sa.ForeignKeyConstraint(
            ['bank_details_id'], ['bank_details.id'],
            name=op.f('fk_withdrawals_bank_details_id_bank_details'),
        ),
        sa.ForeignKeyConstraint(
            ['processed_by'], ['accounts.id'], ondelete='SET NULL',
            name=op.f('fk_withdrawals_processed_by_accounts'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_withdrawals')),
    )
    op.create_index(op.f('ix_withdrawals_owner_id'), 'withdrawals', ['owner_id'])
    op.create_index(op.f('ix_withdrawals_status'), 'withdrawals', ['status'])
    op.create_index(op.f('ix_withdrawals_created_at'), 'withdrawals', ['created_at'])
    op.create_index(
        'idx_withdrawals_owner_status', 'withdrawals', ['owner_id', 'status']
    )

    op.create_table(
        'withdrawal_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('min_withdrawal_amount', MONEY, nullable=False),
        sa.Column('max_withdrawal_amount', MONEY, nullable=False),
        sa.Column('processing_time_hours', sa.Integer(), nullable=False),
        sa.Column('withdrawal_fee_percent', PERCENT, nullable=False),
        sa.Column('min_balance_required', MONEY, nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            'min_withdrawal_amount > 0',
            name=op.f('ck_withdrawal_settings_min_positive'),
        ),
        sa.CheckConstraint(
            'max_withdrawal_amount >= min_withdrawal_amount',
            name=op.f('ck_withdrawal_settings_max_not_below_min'),
        ),
        sa.CheckConstraint(
            'withdrawal_fee_percent >= 0 AND withdrawal_fee_percent < 100',
            name=op.f('ck_withdrawal_settings_fee_range'),
        ),
        sa.CheckConstraint(
            'min_balance_required >= 0',
            name=op.f('ck_withdrawal_settings_floor_non_negative'),
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_withdrawal_settings')),
    )


def downgrade() -> None:
    """Drop ledger tables."""
    op.drop_table('withdrawal_settings')
    op.drop_index('idx_withdrawals_owner_status', table_name='withdrawals')
    op.drop_table('withdrawals')
    op.drop_table('bank_details')
    op.drop_table('commission_rates')
    op.drop_table('commission_records')
    op.drop_index('idx_earnings_owner_status', table_name='earnings')
    op.drop_table('earnings')
    op.drop_table('payment_proofs')
    op.drop_index('idx_investments_status_end_date', table_name='investments')
    op.drop_table('investments')
    op.drop_index('idx_referral_edges_ancestor_level', table_name='referral_edges')
    op.drop_table('referral_edges')
    op.drop_table('accounts')
