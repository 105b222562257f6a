"""Integration tests for account registration and the referral graph."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import select

from investnet.config.business_constants import MAX_DIRECT_REFERRALS
from investnet.models import Account, ReferralEdge
from investnet.repositories.account_repository import AccountRepository
from investnet.services.account.registration import AccountRegistrationService
from investnet.services.referral.query_manager import ReferralQueryManager
from investnet.utils.exceptions import ValidationError


async def _edges_of(session, account_id: int) -> list[ReferralEdge]:
    result = await session.execute(
        select(ReferralEdge)
        .where(ReferralEdge.descendant_id == account_id)
        .order_by(ReferralEdge.level)
    )
    return list(result.scalars().all())


class TestRegistration:
    """Tests for AccountRegistrationService."""

    @pytest.mark.asyncio
    async def test_referral_code_format(self, register):
        account = await register()

        assert account.referral_code.startswith("RF")
        assert len(account.referral_code) == 8
        assert account.referral_code == account.referral_code.upper()
        assert account.direct_referrals == 0

    @pytest.mark.asyncio
    async def test_referral_codes_are_unique(self, register):
        codes = {(await register()).referral_code for _ in range(15)}
        assert len(codes) == 15

    @pytest.mark.asyncio
    async def test_explicit_account_id(self, session):
        service = AccountRegistrationService(session)

        account = await service.register_account(account_id=4242, full_name="Fixed")

        assert account.id == 4242

    @pytest.mark.asyncio
    async def test_unknown_role_rejected(self, session):
        service = AccountRegistrationService(session)

        with pytest.raises(ValidationError):
            await service.register_account(full_name="X", role="superuser")

    @pytest.mark.asyncio
    async def test_unknown_inviter_code_does_not_block(self, session, register):
        account = await register(referrer_code="RFZZZZZZ")

        assert account.id is not None
        assert account.referrer_code == "RFZZZZZZ"
        assert await _edges_of(session, account.id) == []

    @pytest.mark.asyncio
    async def test_inviter_code_is_normalized(self, session, register):
        inviter = await register()

        account = await register(referrer_code=f"  {inviter.referral_code.lower()} ")

        edges = await _edges_of(session, account.id)
        assert [(e.ancestor_id, e.level) for e in edges] == [(inviter.id, 1)]
        assert account.referrer_code == inviter.referral_code

    @pytest.mark.asyncio
    async def test_blank_inviter_code_means_no_inviter(self, session, register):
        account = await register(referrer_code="   ")

        assert account.referrer_code is None
        assert await _edges_of(session, account.id) == []


class TestAncestorChain:
    """Tests for edge creation along the chain."""

    @pytest.mark.asyncio
    async def test_chain_depth_matches_ancestors(self, session, register):
        chain = [await register()]
        for _ in range(4):
            chain.append(await register(referrer_code=chain[-1].referral_code))

        newest = chain[-1]
        edges = await _edges_of(session, newest.id)

        assert [e.level for e in edges] == [1, 2, 3, 4]
        assert [e.ancestor_id for e in edges] == [a.id for a in reversed(chain[:-1])]

    @pytest.mark.asyncio
    async def test_chain_capped_at_ten_levels(self, session, register):
        chain = [await register()]
        for _ in range(12):
            chain.append(await register(referrer_code=chain[-1].referral_code))

        edges = await _edges_of(session, chain[-1].id)

        assert len(edges) == 10
        assert [e.level for e in edges] == list(range(1, 11))
        # Level 10 is ten steps up, the two oldest accounts are out of reach
        assert edges[-1].ancestor_id == chain[-11].id

    @pytest.mark.asyncio
    async def test_counter_incremented_once_per_signup(self, session, register):
        root = await register()
        middle = await register(referrer_code=root.referral_code)
        await register(referrer_code=middle.referral_code)

        await session.refresh(root)
        await session.refresh(middle)

        assert root.direct_referrals == 1
        assert middle.direct_referrals == 1


class TestDirectReferralCap:
    """Tests for the direct-referral cap."""

    @pytest.mark.asyncio
    async def test_eleventh_referral_registers_without_edges(self, session, register):
        inviter = await register()
        for _ in range(MAX_DIRECT_REFERRALS):
            await register(referrer_code=inviter.referral_code)

        late = await register(referrer_code=inviter.referral_code)

        await session.refresh(inviter)
        assert inviter.direct_referrals == MAX_DIRECT_REFERRALS
        assert late.id is not None
        assert await _edges_of(session, late.id) == []

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_concurrent_signups_cannot_exceed_cap(self, session_maker):
        async with session_maker() as session:
            inviter = await AccountRegistrationService(session).register_account(
                full_name="Inviter"
            )
            await AccountRepository(session).update_where(
                [Account.id == inviter.id],
                direct_referrals=MAX_DIRECT_REFERRALS - 1,
            )
            await session.commit()

        async def _signup(name: str) -> int:
            async with session_maker() as session:
                account = await AccountRegistrationService(session).register_account(
                    full_name=name, referrer_code=inviter.referral_code
                )
                return account.id

        ids = await asyncio.gather(_signup("First"), _signup("Second"))

        async with session_maker() as session:
            refreshed = await session.get(Account, inviter.id)
            result = await session.execute(
                select(ReferralEdge).where(
                    ReferralEdge.ancestor_id == inviter.id,
                    ReferralEdge.level == 1,
                )
            )
            edges = list(result.scalars().all())

        assert refreshed.direct_referrals == MAX_DIRECT_REFERRALS
        assert len(edges) == 1
        assert edges[0].descendant_id in ids


class TestReferralQueries:
    """Tests for ReferralQueryManager."""

    @pytest.mark.asyncio
    async def test_ancestors_and_downline(self, session, register):
        a = await register(full_name="A")
        b = await register(referrer_code=a.referral_code, full_name="B")
        c = await register(referrer_code=b.referral_code, full_name="C")
        d = await register(referrer_code=b.referral_code, full_name="D")

        queries = ReferralQueryManager(session)

        ancestors = await queries.get_ancestors(c.id)
        assert [(level, acc.id) for level, acc in ancestors] == [(1, b.id), (2, a.id)]

        level_two = await queries.get_downline_by_level(a.id, 2)
        assert {acc.id for acc in level_two} == {c.id, d.id}

        stats = await queries.get_referral_stats(a.id)
        assert stats["levels"][1]["count"] == 1
        assert stats["levels"][2]["count"] == 2
        assert stats["levels"][10]["count"] == 0
        assert stats["total_referrals"] == 3
        assert stats["total_commission"] == Decimal("0")

    @pytest.mark.asyncio
    async def test_downline_level_out_of_range(self, session, register):
        account = await register()

        with pytest.raises(ValidationError):
            await ReferralQueryManager(session).get_downline_by_level(account.id, 11)
