"""
Async runner for dramatiq tasks.

Runs coroutines from synchronous dramatiq actors, reusing one event loop
per worker thread so database connections stay bound to a single loop.
"""

import asyncio
import threading
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.database import create_engine, create_session_maker

T = TypeVar("T")

_thread_local = threading.local()


def get_event_loop() -> asyncio.AbstractEventLoop:
    """Get or create the event loop of the current thread."""
    loop = getattr(_thread_local, "loop", None)
    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        _thread_local.loop = loop
        logger.debug(
            f"Created new event loop for thread {threading.current_thread().name}"
        )
    return loop


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run async coroutine in the thread's event loop.

    Args:
        coro: Async coroutine to run

    Returns:
        Result of the coroutine
    """
    loop = get_event_loop()
    try:
        return loop.run_until_complete(coro)
    except Exception as e:
        logger.exception(f"Error running async coroutine: {e}")
        raise


@asynccontextmanager
async def create_local_session(
    database_url: str | None = None,
) -> AsyncIterator[AsyncSession]:
    """
    Create a session on a private engine for the current event loop.

    Usage:
        async with create_local_session() as session:
            await InvestmentStatusManager(session).complete_matured()

    Yields:
        AsyncSession bound to the current event loop
    """
    local_engine = create_engine(database_url, echo=False)
    session_maker = create_session_maker(local_engine)
    try:
        async with session_maker() as session:
            yield session
    finally:
        await local_engine.dispose()
