"""Domain entity representing a user notification."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Category of the event a notification describes."""

    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_COMMENTED = "TASK_COMMENTED"
    READING_SUBMITTED = "READING_SUBMITTED"
    READING_APPROVED = "READING_APPROVED"
    READING_REJECTED = "READING_REJECTED"
    GENERAL = "GENERAL"


@dataclass
class Notification:
    """Event delivered to a specific user.

    ``user_id`` is fixed at creation and decides who may read, acknowledge or
    delete the notification. ``is_read`` only ever moves from ``False`` to
    ``True``.
    """

    id: int | None
    user_id: int
    type: NotificationType
    title: str
    message: str
    organization_id: int | None = None
    task_id: int | None = None
    reading_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Pagination:
    """Window description returned alongside a page of notifications."""

    total: int
    skip: int
    take: int
    pages: int

    @classmethod
    def build(cls, *, total: int, skip: int, take: int) -> "Pagination":
        """Compute ``pages`` for ``total`` items split into pages of ``take``."""

        if take < 1:
            raise ValueError("take must be a positive integer")
        return cls(total=total, skip=skip, take=take, pages=math.ceil(total / take))


@dataclass
class NotificationPage:
    """One page of a user's notifications, most recent first."""

    notifications: list[Notification]
    pagination: Pagination


__all__ = ["Notification", "NotificationPage", "NotificationType", "Pagination"]
