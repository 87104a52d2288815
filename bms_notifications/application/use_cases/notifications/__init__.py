"""Public helpers for emitting domain notifications."""

from .events import (
    notify_reading_approved,
    notify_reading_commented,
    notify_reading_rejected,
    notify_reading_submitted,
    notify_task_assigned,
)

__all__ = [
    "notify_task_assigned",
    "notify_reading_submitted",
    "notify_reading_approved",
    "notify_reading_rejected",
    "notify_reading_commented",
]
