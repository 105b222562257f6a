"""
Database decorators for automatic commit and rollback.

Service operations are transaction-scoped: they commit once on success
and roll back everything on any exception. These decorators locate the
session from a ``session`` keyword, a leading ``AsyncSession`` argument
or the ``session`` attribute of the bound service instance.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


def _find_session(args: tuple[Any, ...], kwargs: dict[str, Any]) -> AsyncSession | None:
    session = kwargs.get("session")
    if session is not None:
        return session

    if args:
        if isinstance(args[0], AsyncSession):
            return args[0]
        return getattr(args[0], "session", None)

    return None


async def _rollback(session: AsyncSession, func_name: str, error: Exception) -> None:
    try:
        await session.rollback()
        logger.info(
            f"Rollback performed in {func_name} due to error: {type(error).__name__}"
        )
    except Exception as rollback_error:
        logger.error(
            f"Failed to rollback in {func_name}: {rollback_error}",
            exc_info=True,
        )


def with_rollback_on_error(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Roll back the session on any exception, then re-raise.

    Usage:
        @with_rollback_on_error
        async def my_function(self, ...):
            ...
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        session = _find_session(args, kwargs)
        if session is None:
            logger.warning(
                f"Function {func.__name__} decorated with @with_rollback_on_error "
                f"but no session found. Rollback will not be performed."
            )
            return await func(*args, **kwargs)

        try:
            return await func(*args, **kwargs)
        except Exception as e:
            await _rollback(session, func.__name__, e)
            raise

    return wrapper


def with_auto_commit(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Commit the session on success, roll back and re-raise on error.

    Usage:
        @with_auto_commit
        async def decide(self, investment_id: int, ...):
            # No need to call session.commit() - it's automatic
            ...
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        session = _find_session(args, kwargs)
        if session is None:
            logger.warning(
                f"Function {func.__name__} decorated with @with_auto_commit "
                f"but no session found. Commit/rollback will not be performed."
            )
            return await func(*args, **kwargs)

        try:
            result = await func(*args, **kwargs)
            await session.commit()
            logger.debug(f"Auto-commit performed in {func.__name__}")
            return result
        except Exception as e:
            await _rollback(session, func.__name__, e)
            raise

    return wrapper
