"""Dictionary backed notification store."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from bms_notifications.domain.entities import Notification, NotificationType
from bms_notifications.domain.exceptions import NotFoundOrForbidden
from bms_notifications.domain.repositories import NotificationStore, ensure_mutable_changes
from bms_notifications.utils import now_in_app_timezone


class InMemoryNotificationRepository(NotificationStore):
    """Keep notifications in process memory.

    Useful for tests and for embedding the service without a database. Every
    operation holds an internal lock, so each call is atomic with respect to
    the others. Entities are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._records: dict[int, Notification] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert(self, notification: Notification) -> Notification:
        with self._lock:
            return replace(self._store_new(notification))

    def insert_many(self, notifications: Sequence[Notification]) -> int:
        with self._lock:
            for notification in notifications:
                self._store_new(notification)
        return len(notifications)

    def get(self, notification_id: int) -> Notification | None:
        with self._lock:
            record = self._records.get(notification_id)
            return replace(record) if record is not None else None

    def list_for_user(
        self, user_id: int, *, skip: int, limit: int
    ) -> Sequence[Notification]:
        with self._lock:
            owned = [record for record in self._records.values() if record.user_id == user_id]
        owned.sort(key=lambda record: (record.created_at, record.id), reverse=True)
        return [replace(record) for record in owned[skip : skip + limit]]

    def count_for_user(self, user_id: int) -> int:
        with self._lock:
            return sum(1 for record in self._records.values() if record.user_id == user_id)

    def count_unread_for_user(self, user_id: int) -> int:
        with self._lock:
            return sum(
                1
                for record in self._records.values()
                if record.user_id == user_id and not record.is_read
            )

    def update(self, notification_id: int, changes: Mapping[str, Any]) -> Notification:
        ensure_mutable_changes(changes)
        with self._lock:
            record = self._records.get(notification_id)
            if record is None:
                raise NotFoundOrForbidden()
            updated = replace(record, **changes, updated_at=now_in_app_timezone())
            self._records[notification_id] = updated
            return replace(updated)

    def mark_all_read_for_user(self, user_id: int) -> int:
        now = now_in_app_timezone()
        updated = 0
        with self._lock:
            for notification_id, record in self._records.items():
                if record.user_id == user_id and not record.is_read:
                    self._records[notification_id] = replace(
                        record, is_read=True, updated_at=now
                    )
                    updated += 1
        return updated

    def delete(self, notification_id: int) -> None:
        with self._lock:
            if self._records.pop(notification_id, None) is None:
                raise NotFoundOrForbidden()

    def delete_for_task(self, task_id: int) -> int:
        with self._lock:
            doomed = [
                notification_id
                for notification_id, record in self._records.items()
                if record.task_id == task_id
            ]
            for notification_id in doomed:
                del self._records[notification_id]
        return len(doomed)

    def _store_new(self, notification: Notification) -> Notification:
        record = replace(
            notification,
            id=next(self._ids),
            type=NotificationType(notification.type),
            is_read=False,
            created_at=now_in_app_timezone(),
            updated_at=None,
        )
        self._records[record.id] = record
        return record


__all__ = ["InMemoryNotificationRepository"]
