"""Tests for background jobs."""

from datetime import timedelta

import pytest

from investnet.config.settings import settings
from investnet.models import Investment, InvestmentStatus
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.services.investment.lifecycle import (
    InvestmentCreator,
    InvestmentDecisionHandler,
    InvestmentProofHandler,
)
from investnet.utils.datetime_utils import add_months, utc_now
from jobs import async_runner
from jobs.scheduler import create_scheduler, enqueue_investment_completion
from jobs.tasks import investment_completion


class TestInvestmentCompletionTask:
    """Tests for the investment completion task body."""

    @pytest.mark.asyncio
    async def test_completes_matured_investments(
        self, monkeypatch, engine, session, register, admin
    ):
        owner = await register()
        investment = await InvestmentCreator(session).create_investment(owner.id, "100")
        await InvestmentProofHandler(session).submit_proof(
            investment.id, owner.id, "proofs/p.png", "image/png"
        )
        await InvestmentDecisionHandler(session).decide(investment.id, admin.id, True)
        await InvestmentRepository(session).update_where(
            [Investment.id == investment.id], end_date=add_months(utc_now(), -1)
        )
        await session.commit()

        database_url = engine.url.render_as_string(hide_password=False)
        monkeypatch.setattr(
            investment_completion,
            "create_local_session",
            lambda: async_runner.create_local_session(database_url),
        )

        assert await investment_completion._complete_matured_investments_async() == 1
        assert await investment_completion._complete_matured_investments_async() == 0

        await session.refresh(investment)
        assert investment.status == InvestmentStatus.COMPLETED


class TestScheduler:
    """Tests for the periodic job scheduler."""

    def test_completion_job_registered(self):
        scheduler = create_scheduler()

        jobs = scheduler.get_jobs()

        assert [job.id for job in jobs] == ["investment_completion"]
        assert jobs[0].func is enqueue_investment_completion
        assert jobs[0].trigger.interval == timedelta(
            minutes=settings.completion_check_interval_minutes
        )
