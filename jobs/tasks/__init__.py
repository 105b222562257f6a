"""Dramatiq tasks."""

from jobs.tasks.investment_completion import complete_matured_investments

__all__ = ["complete_matured_investments"]
