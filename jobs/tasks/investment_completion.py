"""
Investment completion task.

Moves active investments whose 40-month term has ended to completed.
"""

import dramatiq
from loguru import logger

from investnet.services.investment.lifecycle.status_manager import (
    InvestmentStatusManager,
)
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=3, time_limit=300_000)  # 5 min timeout
def complete_matured_investments() -> int:
    """
    Complete matured investments.

    Returns:
        Number of investments completed
    """
    logger.info("Starting investment completion task...")

    completed = run_async(_complete_matured_investments_async())

    logger.info(
        "Investment completion task finished",
        extra={"completed": completed},
    )
    return completed


async def _complete_matured_investments_async() -> int:
    """Async implementation of completion task."""
    async with create_local_session() as session:
        return await InvestmentStatusManager(session).complete_matured()
