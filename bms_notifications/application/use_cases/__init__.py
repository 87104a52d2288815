"""Aggregate application use cases."""

from .notifications import (
    notify_reading_approved,
    notify_reading_commented,
    notify_reading_rejected,
    notify_reading_submitted,
    notify_task_assigned,
)

__all__ = [
    "notify_reading_approved",
    "notify_reading_commented",
    "notify_reading_rejected",
    "notify_reading_submitted",
    "notify_task_assigned",
]
