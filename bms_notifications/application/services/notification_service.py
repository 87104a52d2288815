"""Business rules for the notification lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bms_notifications.domain.entities import (
    Notification,
    NotificationPage,
    NotificationType,
    Pagination,
)
from bms_notifications.domain.exceptions import NotFoundOrForbidden, ValidationError
from bms_notifications.domain.repositories import NotificationStore

DEFAULT_PAGE_SIZE = 50

logger = logging.getLogger(__name__)


class NotificationService:
    """Create, list, acknowledge and delete notifications on behalf of a user.

    The service keeps no state of its own besides the injected store, so one
    instance can be shared by concurrent requests. Storage failures are never
    retried here; they propagate as ``StorageFault``.
    """

    def __init__(self, store: NotificationStore) -> None:
        self._store = store

    def create_notification(
        self,
        *,
        user_id: int,
        type: NotificationType | str,
        title: str,
        message: str,
        organization_id: int | None = None,
        task_id: int | None = None,
        reading_id: int | None = None,
    ) -> Notification:
        """Store a new unread notification for ``user_id``.

        Only trusted internal callers are expected to reach this method; it
        performs no ownership check.
        """

        _ensure_user_id(user_id)
        notification = Notification(
            id=None,
            user_id=user_id,
            type=_coerce_type(type),
            title=_require_text(title, "title"),
            message=_require_text(message, "message"),
            organization_id=organization_id,
            task_id=task_id,
            reading_id=reading_id,
            is_read=False,
        )
        saved = self._store.insert(notification)
        logger.info(
            "Created %s notification %s for user %s", saved.type.value, saved.id, user_id
        )
        return saved

    def create_notifications(
        self,
        *,
        user_ids: Iterable[int],
        type: NotificationType | str,
        title: str,
        message: str,
        organization_id: int | None = None,
        task_id: int | None = None,
        reading_id: int | None = None,
    ) -> int:
        """Fan the same event out to every user in ``user_ids``.

        Duplicated recipients receive a single notification. Returns the
        number of notifications stored.
        """

        recipients: list[int] = []
        for user_id in user_ids:
            _ensure_user_id(user_id)
            if user_id not in recipients:
                recipients.append(user_id)

        notification_type = _coerce_type(type)
        title = _require_text(title, "title")
        message = _require_text(message, "message")
        if not recipients:
            return 0

        created = self._store.insert_many(
            [
                Notification(
                    id=None,
                    user_id=user_id,
                    type=notification_type,
                    title=title,
                    message=message,
                    organization_id=organization_id,
                    task_id=task_id,
                    reading_id=reading_id,
                    is_read=False,
                )
                for user_id in recipients
            ]
        )
        logger.info(
            "Created %s %s notifications for %s recipients",
            created,
            notification_type.value,
            len(recipients),
        )
        return created

    def get_user_notifications(
        self, user_id: int, skip: int = 0, take: int = DEFAULT_PAGE_SIZE
    ) -> NotificationPage:
        """Return one page of ``user_id``'s notifications, most recent first."""

        if take < 1:
            raise ValidationError("take must be greater than zero")
        if skip < 0:
            raise ValidationError("skip cannot be negative")

        notifications = list(self._store.list_for_user(user_id, skip=skip, limit=take))
        total = self._store.count_for_user(user_id)
        return NotificationPage(
            notifications=notifications,
            pagination=Pagination.build(total=total, skip=skip, take=take),
        )

    def get_unread_count(self, user_id: int) -> int:
        return self._store.count_unread_for_user(user_id)

    def mark_as_read(self, user_id: int, notification_id: int) -> Notification:
        """Flag one of ``user_id``'s notifications as read.

        Marking an already-read notification returns it unchanged.
        """

        notification = self._get_owned_notification(user_id, notification_id)
        if notification.is_read:
            return notification
        return self._store.update(notification_id, {"is_read": True})

    def mark_all_as_read(self, user_id: int) -> int:
        """Flag every unread notification of ``user_id`` and return how many changed."""

        updated = self._store.mark_all_read_for_user(user_id)
        logger.debug("Marked %s notifications as read for user %s", updated, user_id)
        return updated

    def delete_notification(self, user_id: int, notification_id: int) -> None:
        self._get_owned_notification(user_id, notification_id)
        self._store.delete(notification_id)
        logger.info("Deleted notification %s for user %s", notification_id, user_id)

    def delete_task_notifications(self, task_id: int) -> int:
        """Remove every notification attached to ``task_id`` once the task is gone."""

        removed = self._store.delete_for_task(task_id)
        logger.info("Deleted %s notifications linked to task %s", removed, task_id)
        return removed

    def _get_owned_notification(self, user_id: int, notification_id: int) -> Notification:
        notification = self._store.get(notification_id)
        if notification is None or notification.user_id != user_id:
            logger.warning(
                "User %s cannot access notification %s", user_id, notification_id
            )
            raise NotFoundOrForbidden()
        return notification


def _ensure_user_id(user_id: int | None) -> None:
    if user_id is None or isinstance(user_id, bool):
        raise ValidationError("user_id is required")


def _require_text(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return value


def _coerce_type(value: NotificationType | str | None) -> NotificationType:
    if value is None or value == "":
        raise ValidationError("type is required")
    try:
        return NotificationType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown notification type: {value}") from exc


__all__ = ["DEFAULT_PAGE_SIZE", "NotificationService"]
