"""
Periodic task scheduler.

Enqueues background tasks on a fixed interval. Run as its own process
next to the dramatiq workers:

    python -m jobs.scheduler
"""

import asyncio

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from investnet.config.logging import setup_logging
from investnet.config.settings import settings
from jobs.broker import broker  # noqa: F401  (registers the broker)
from jobs.tasks.investment_completion import complete_matured_investments


def enqueue_investment_completion() -> None:
    """Send the completion task to the workers."""
    complete_matured_investments.send()
    logger.debug("Investment completion task enqueued")


def create_scheduler() -> AsyncIOScheduler:
    """Create scheduler with all periodic jobs registered."""
    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        enqueue_investment_completion,
        "interval",
        minutes=settings.completion_check_interval_minutes,
        id="investment_completion",
        name="Complete matured investments",
        max_instances=1,
        coalesce=True,
    )
    return scheduler


async def main() -> None:
    """Start scheduler and run until cancelled."""
    setup_logging()
    scheduler = create_scheduler()
    scheduler.start()
    logger.info(
        "Scheduler started",
        extra={"jobs": [job.id for job in scheduler.get_jobs()]},
    )

    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


if __name__ == "__main__":
    asyncio.run(main())
