"""
Background jobs.

Importing this package configures the Redis broker, so actors declared
in jobs.tasks bind to it. Start workers with:

    dramatiq jobs.tasks
"""

from jobs.broker import broker

__all__ = ["broker"]
