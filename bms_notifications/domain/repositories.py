"""Persistence contract the notification core depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from bms_notifications.domain.entities import Notification

MUTABLE_FIELDS = frozenset({"is_read"})

# Identifiers are stored in signed 64-bit integer columns.
MAX_STORED_INTEGER = 2**63 - 1


class NotificationStore(ABC):
    """Abstract storage for :class:`Notification` records.

    Implementations must keep listings ordered by ``created_at`` descending
    (ties broken by ``id`` descending) and report any backend failure as
    :class:`~bms_notifications.domain.exceptions.StorageFault`. Each method is
    atomic on its own; no cross-call transaction is expected.
    """

    @abstractmethod
    def insert(self, notification: Notification) -> Notification:
        """Persist ``notification`` unread and return it with ``id`` and ``created_at`` set."""

    @abstractmethod
    def insert_many(self, notifications: Sequence[Notification]) -> int:
        """Persist every entry of ``notifications`` at once and return how many were stored."""

    @abstractmethod
    def get(self, notification_id: int) -> Notification | None:
        """Return the notification identified by ``notification_id`` if it exists."""

    @abstractmethod
    def list_for_user(
        self, user_id: int, *, skip: int, limit: int
    ) -> Sequence[Notification]:
        """Return a window of ``user_id``'s notifications, most recent first."""

    @abstractmethod
    def count_for_user(self, user_id: int) -> int:
        """Return how many notifications ``user_id`` owns."""

    @abstractmethod
    def count_unread_for_user(self, user_id: int) -> int:
        """Return how many unread notifications ``user_id`` owns."""

    @abstractmethod
    def update(self, notification_id: int, changes: Mapping[str, Any]) -> Notification:
        """Apply ``changes`` (restricted to :data:`MUTABLE_FIELDS`) and return the result."""

    @abstractmethod
    def mark_all_read_for_user(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id`` as read; return the affected count."""

    @abstractmethod
    def delete(self, notification_id: int) -> None:
        """Remove the notification identified by ``notification_id``."""

    @abstractmethod
    def delete_for_task(self, task_id: int) -> int:
        """Remove every notification referencing ``task_id``; return the removed count."""


def ensure_mutable_changes(changes: Mapping[str, Any]) -> None:
    """Reject ``changes`` touching fields other than :data:`MUTABLE_FIELDS`."""

    forbidden = sorted(set(changes) - MUTABLE_FIELDS)
    if forbidden:
        msg = f"Notification fields cannot be modified: {', '.join(forbidden)}"
        raise ValueError(msg)
    if "is_read" in changes and changes["is_read"] is not True:
        raise ValueError("Read notifications cannot be marked as unread")


def fits_stored_integer(value: int) -> bool:
    """Return whether ``value`` can be compared against a stored identifier."""

    return -MAX_STORED_INTEGER - 1 <= value <= MAX_STORED_INTEGER


__all__ = [
    "MAX_STORED_INTEGER",
    "MUTABLE_FIELDS",
    "NotificationStore",
    "ensure_mutable_changes",
    "fits_stored_integer",
]
