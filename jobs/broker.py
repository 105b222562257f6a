"""
Dramatiq broker configuration.

Redis-backed queue for the ledger's background tasks.
"""

import dramatiq
from dramatiq.brokers.redis import RedisBroker
from dramatiq.middleware import CurrentMessage, Retries, ShutdownNotifications
from loguru import logger

from investnet.config.settings import Settings, settings


def create_broker(config: Settings = settings) -> RedisBroker:
    """
    Build the Redis broker with the middleware the workers rely on.

    Args:
        config: Settings carrying the Redis connection

    Returns:
        Configured broker (not yet installed as the global one)
    """
    redis_broker = RedisBroker(
        host=config.redis_host,
        port=config.redis_port,
        password=config.redis_password or None,
        db=config.redis_db,
    )

    redis_broker.add_middleware(ShutdownNotifications())
    redis_broker.add_middleware(CurrentMessage())
    redis_broker.add_middleware(
        Retries(
            max_retries=3,
            min_backoff=1000,  # 1 second
            max_backoff=60000,  # 1 minute
        )
    )
    return redis_broker


broker = create_broker()
dramatiq.set_broker(broker)

logger.info(
    f"Dramatiq broker ready: redis://{settings.redis_host}:{settings.redis_port}/"
    f"{settings.redis_db}"
)
