"""Integration tests for bank details and the withdrawal flow."""

from decimal import Decimal

import pytest
import pytest_asyncio

from investnet.models import Earning, EarningStatus, WithdrawalStatus
from investnet.repositories.earning_repository import EarningRepository
from investnet.repositories.withdrawal_repository import WithdrawalSettingsRepository
from investnet.services.investment.lifecycle import (
    InvestmentCreator,
    InvestmentDecisionHandler,
    InvestmentProofHandler,
)
from investnet.services.withdrawal import (
    BankDetailsService,
    WithdrawalLifecycleHandler,
    WithdrawalRequestHandler,
    WithdrawalStatisticsService,
    WithdrawalValidator,
)
from investnet.services.withdrawal.withdrawal_limit_checks import (
    INSUFFICIENT_BALANCE,
)
from investnet.utils.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
)

BANK_FIELDS = {
    "account_holder_name": "Test Agent",
    "account_number": "123456789012",
    "ifsc_code": "sbin0001234",
    "bank_name": "State Bank",
    "branch_name": "Main",
}


@pytest_asyncio.fixture
async def earner(session, register, admin):
    """Owner with 10000.00 of paid earnings."""
    owner = await register(full_name="Earner")
    investment = await InvestmentCreator(session).create_investment(owner.id, "10000")
    await InvestmentProofHandler(session).submit_proof(
        investment.id, owner.id, "proofs/receipt.pdf", "application/pdf"
    )
    await InvestmentDecisionHandler(session).decide(investment.id, admin.id, True)

    earnings = await EarningRepository(session).get_by_investment(investment.id)
    paid_ids = [e.id for e in earnings[:20]]
    await EarningRepository(session).update_where(
        [Earning.id.in_(paid_ids)], status=EarningStatus.PAID.value
    )
    await session.commit()
    return owner


@pytest_asyncio.fixture
async def verified_earner(session, earner, admin):
    """Earner with verified bank details."""
    service = BankDetailsService(session)
    await service.save_bank_details(earner.id, **BANK_FIELDS)
    await service.verify_bank_details(earner.id, admin.id)
    return earner


class TestBankDetails:
    """Tests for BankDetailsService."""

    @pytest.mark.asyncio
    async def test_save_normalizes_ifsc(self, session, register):
        owner = await register()

        details = await BankDetailsService(session).save_bank_details(
            owner.id, **BANK_FIELDS
        )

        assert details.ifsc_code == "SBIN0001234"
        assert details.verified is False
        assert details.masked_account_number.endswith("9012")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value",
        [
            ("account_number", "12AB56"),
            ("ifsc_code", "SBIN1001234"),
            ("bank_name", "   "),
        ],
    )
    async def test_save_rejects_malformed(self, session, register, field, value):
        owner = await register()

        with pytest.raises(ValidationError):
            await BankDetailsService(session).save_bank_details(
                owner.id, **{**BANK_FIELDS, field: value}
            )

    @pytest.mark.asyncio
    async def test_resave_replaces_unverified(self, session, register):
        owner = await register()
        service = BankDetailsService(session)
        await service.save_bank_details(owner.id, **BANK_FIELDS)

        details = await service.save_bank_details(
            owner.id, **{**BANK_FIELDS, "branch_name": "North"}
        )

        assert details.branch_name == "North"

    @pytest.mark.asyncio
    async def test_verified_details_are_frozen(self, session, register, admin):
        owner = await register()
        service = BankDetailsService(session)
        await service.save_bank_details(owner.id, **BANK_FIELDS)
        await service.verify_bank_details(owner.id, admin.id, "checked")

        with pytest.raises(StateConflictError):
            await service.save_bank_details(owner.id, **BANK_FIELDS)

    @pytest.mark.asyncio
    async def test_agent_cannot_verify(self, session, register):
        owner = await register()
        service = BankDetailsService(session)
        await service.save_bank_details(owner.id, **BANK_FIELDS)

        with pytest.raises(PermissionDeniedError):
            await service.verify_bank_details(owner.id, owner.id)


class TestEligibility:
    """Eligibility against real balances."""

    @pytest.mark.asyncio
    async def test_balance_counts_paid_earnings_only(self, session, earner):
        result = await WithdrawalValidator(session).check_eligibility(
            earner.id, "12000"
        )

        assert result.eligible is False
        assert result.reason == INSUFFICIENT_BALANCE
        assert result.available_balance == Decimal("10000")

    @pytest.mark.asyncio
    async def test_within_balance_is_eligible(self, session, earner):
        result = await WithdrawalValidator(session).check_eligibility(earner.id, "5000")

        assert result.eligible is True
        assert result.available_balance == Decimal("10000")

    @pytest.mark.asyncio
    async def test_settings_change_applies_to_next_check(
        self, session_maker, session, earner
    ):
        owner_id = earner.id
        validator = WithdrawalValidator(session)
        assert (await validator.check_eligibility(owner_id, "5000")).eligible is True

        async with session_maker() as admin_session:
            repo = WithdrawalSettingsRepository(admin_session)
            withdrawal_settings = await repo.get_settings()
            withdrawal_settings.min_withdrawal_amount = Decimal("6000")
            await admin_session.commit()
        session.expire_all()

        result = await validator.check_eligibility(owner_id, "5000")

        assert result.eligible is False
        assert result.code == "MIN_AMOUNT"

    @pytest.mark.asyncio
    async def test_unknown_owner(self, session):
        with pytest.raises(NotFoundError):
            await WithdrawalValidator(session).check_eligibility(999_999, "5000")


class TestWithdrawalRequests:
    """Tests for WithdrawalRequestHandler."""

    @pytest.mark.asyncio
    async def test_bank_details_required(self, session, earner):
        with pytest.raises(ValidationError) as exc_info:
            await WithdrawalRequestHandler(session).create_withdrawal(earner.id, "5000")

        assert exc_info.value.code == "BANK_DETAILS_UNVERIFIED"

    @pytest.mark.asyncio
    async def test_unverified_bank_details_rejected(self, session, earner):
        await BankDetailsService(session).save_bank_details(earner.id, **BANK_FIELDS)

        with pytest.raises(ValidationError):
            await WithdrawalRequestHandler(session).create_withdrawal(earner.id, "5000")

    @pytest.mark.asyncio
    async def test_ineligible_amount_rejected(self, session, verified_earner):
        with pytest.raises(ValidationError) as exc_info:
            await WithdrawalRequestHandler(session).create_withdrawal(
                verified_earner.id, "12000"
            )

        assert exc_info.value.code == "INSUFFICIENT_BALANCE"
        assert str(exc_info.value) == INSUFFICIENT_BALANCE

    @pytest.mark.asyncio
    async def test_create_reserves_balance(self, session, verified_earner):
        handler = WithdrawalRequestHandler(session)

        withdrawal = await handler.create_withdrawal(verified_earner.id, "5000")

        assert withdrawal.status == WithdrawalStatus.PENDING
        assert withdrawal.fee_amount == Decimal("0")
        assert withdrawal.net_amount == Decimal("5000")

        with pytest.raises(ValidationError):
            await handler.create_withdrawal(verified_earner.id, "5000.01")

    @pytest.mark.asyncio
    async def test_fee_is_deducted(self, session, verified_earner):
        withdrawal_settings = await WithdrawalSettingsRepository(session).get_settings()
        withdrawal_settings.withdrawal_fee_percent = Decimal("2.5")
        await session.commit()

        withdrawal = await WithdrawalRequestHandler(session).create_withdrawal(
            verified_earner.id, "4000"
        )

        assert withdrawal.fee_amount == Decimal("100.00")
        assert withdrawal.net_amount == Decimal("3900.00")

    @pytest.mark.asyncio
    async def test_cancel_releases_reservation(self, session, verified_earner):
        handler = WithdrawalRequestHandler(session)
        withdrawal = await handler.create_withdrawal(verified_earner.id, "8000")

        cancelled = await handler.cancel_withdrawal(withdrawal.id, verified_earner.id)

        assert cancelled.status == WithdrawalStatus.CANCELLED
        again = await handler.create_withdrawal(verified_earner.id, "8000")
        assert again.status == WithdrawalStatus.PENDING

    @pytest.mark.asyncio
    async def test_cancel_by_other_account_denied(
        self, session, register, verified_earner
    ):
        stranger = await register()
        handler = WithdrawalRequestHandler(session)
        withdrawal = await handler.create_withdrawal(verified_earner.id, "2000")

        with pytest.raises(PermissionDeniedError):
            await handler.cancel_withdrawal(withdrawal.id, stranger.id)


class TestWithdrawalProcessing:
    """Tests for WithdrawalLifecycleHandler and statistics."""

    @pytest.mark.asyncio
    async def test_processing_then_completed(self, session, verified_earner, admin):
        withdrawal = await WithdrawalRequestHandler(session).create_withdrawal(
            verified_earner.id, "3000"
        )
        lifecycle = WithdrawalLifecycleHandler(session)

        processing = await lifecycle.process_withdrawal(
            withdrawal.id, admin.id, "processing"
        )
        assert processing.status == WithdrawalStatus.PROCESSING
        assert processing.processed_at is None

        completed = await lifecycle.process_withdrawal(
            withdrawal.id, admin.id, WithdrawalStatus.COMPLETED, "sent"
        )
        assert completed.status == WithdrawalStatus.COMPLETED
        assert completed.processed_by == admin.id
        assert completed.processed_at is not None

        with pytest.raises(StateConflictError):
            await lifecycle.process_withdrawal(
                withdrawal.id, admin.id, WithdrawalStatus.REJECTED
            )

    @pytest.mark.asyncio
    async def test_owner_cannot_cancel_processing(
        self, session, verified_earner, admin
    ):
        handler = WithdrawalRequestHandler(session)
        withdrawal = await handler.create_withdrawal(verified_earner.id, "3000")
        await WithdrawalLifecycleHandler(session).process_withdrawal(
            withdrawal.id, admin.id, WithdrawalStatus.PROCESSING
        )

        with pytest.raises(StateConflictError):
            await handler.cancel_withdrawal(withdrawal.id, verified_earner.id)

    @pytest.mark.asyncio
    async def test_admin_cannot_cancel(self, session, verified_earner, admin):
        withdrawal = await WithdrawalRequestHandler(session).create_withdrawal(
            verified_earner.id, "3000"
        )

        with pytest.raises(StateConflictError):
            await WithdrawalLifecycleHandler(session).process_withdrawal(
                withdrawal.id, admin.id, WithdrawalStatus.CANCELLED
            )

    @pytest.mark.asyncio
    async def test_unknown_status(self, session, verified_earner, admin):
        with pytest.raises(ValidationError):
            await WithdrawalLifecycleHandler(session).process_withdrawal(
                1, admin.id, "approved"
            )

    @pytest.mark.asyncio
    async def test_agent_cannot_process(self, session, verified_earner):
        withdrawal = await WithdrawalRequestHandler(session).create_withdrawal(
            verified_earner.id, "3000"
        )

        with pytest.raises(PermissionDeniedError):
            await WithdrawalLifecycleHandler(session).process_withdrawal(
                withdrawal.id, verified_earner.id, WithdrawalStatus.COMPLETED
            )

    @pytest.mark.asyncio
    async def test_rejection_releases_balance(self, session, verified_earner, admin):
        handler = WithdrawalRequestHandler(session)
        withdrawal = await handler.create_withdrawal(verified_earner.id, "10000")

        await WithdrawalLifecycleHandler(session).process_withdrawal(
            withdrawal.id, admin.id, WithdrawalStatus.REJECTED, "name mismatch"
        )

        result = await WithdrawalValidator(session).check_eligibility(
            verified_earner.id, "10000"
        )
        assert result.eligible is True

    @pytest.mark.asyncio
    async def test_completed_withdrawal_stops_reserving(
        self, session, verified_earner, admin
    ):
        withdrawal = await WithdrawalRequestHandler(session).create_withdrawal(
            verified_earner.id, "5000"
        )
        await WithdrawalLifecycleHandler(session).process_withdrawal(
            withdrawal.id, admin.id, WithdrawalStatus.COMPLETED
        )

        result = await WithdrawalValidator(session).check_eligibility(
            verified_earner.id, "6000"
        )

        assert result.available_balance == Decimal("10000")
        assert result.eligible is True

    @pytest.mark.asyncio
    async def test_summary(self, session, verified_earner, admin):
        handler = WithdrawalRequestHandler(session)
        lifecycle = WithdrawalLifecycleHandler(session)
        done = await handler.create_withdrawal(verified_earner.id, "2000")
        await lifecycle.process_withdrawal(done.id, admin.id, WithdrawalStatus.COMPLETED)
        await handler.create_withdrawal(verified_earner.id, "1500")

        summary = await WithdrawalStatisticsService(session).get_withdrawal_summary(
            verified_earner.id
        )

        assert summary.total_withdrawn == Decimal("2000")
        assert summary.pending_amount == Decimal("1500")
        assert summary.available_balance == Decimal("8500")
