"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import false
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bms_notifications.domain.entities import Notification, NotificationType
from bms_notifications.domain.exceptions import NotFoundOrForbidden, StorageFault
from bms_notifications.domain.repositories import (
    MAX_STORED_INTEGER,
    NotificationStore,
    ensure_mutable_changes,
    fits_stored_integer,
)
from bms_notifications.infrastructure.models import NotificationModel
from bms_notifications.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class NotificationRepository(NotificationStore):
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        with self._storage_errors("inserting a notification"):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def insert_many(self, notifications: Sequence[Notification]) -> int:
        models = []
        for notification in notifications:
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            models.append(model)
        if not models:
            return 0
        with self._storage_errors("inserting notifications"):
            self.session.add_all(models)
            self.session.commit()
        return len(models)

    def get(self, notification_id: int) -> Notification | None:
        if not fits_stored_integer(notification_id):
            return None
        with self._storage_errors("loading a notification"):
            model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list_for_user(
        self, user_id: int, *, skip: int, limit: int
    ) -> Sequence[Notification]:
        if not fits_stored_integer(user_id) or skip > MAX_STORED_INTEGER:
            return []
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(skip)
            .limit(min(limit, MAX_STORED_INTEGER))
        )
        with self._storage_errors("listing notifications"):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def count_for_user(self, user_id: int) -> int:
        if not fits_stored_integer(user_id):
            return 0
        with self._storage_errors("counting notifications"):
            return (
                self.session.query(NotificationModel)
                .filter(NotificationModel.user_id == user_id)
                .count()
            )

    def count_unread_for_user(self, user_id: int) -> int:
        if not fits_stored_integer(user_id):
            return 0
        with self._storage_errors("counting unread notifications"):
            return (
                self.session.query(NotificationModel)
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.is_read == false())
                .count()
            )

    def update(self, notification_id: int, changes: Mapping[str, Any]) -> Notification:
        ensure_mutable_changes(changes)
        if not fits_stored_integer(notification_id):
            raise NotFoundOrForbidden()
        with self._storage_errors("updating a notification"):
            model = self.session.get(NotificationModel, notification_id)
            if model is None:
                raise NotFoundOrForbidden()
            for name, value in changes.items():
                setattr(model, name, value)
            model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_read_for_user(self, user_id: int) -> int:
        if not fits_stored_integer(user_id):
            return 0
        with self._storage_errors("marking notifications as read"):
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.user_id == user_id,
                    NotificationModel.is_read == false(),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.updated_at: ensure_app_naive_datetime(
                            now_in_app_timezone()
                        ),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        return updated

    def delete(self, notification_id: int) -> None:
        if not fits_stored_integer(notification_id):
            raise NotFoundOrForbidden()
        with self._storage_errors("deleting a notification"):
            model = self.session.get(NotificationModel, notification_id)
            if model is None:
                raise NotFoundOrForbidden()
            self.session.delete(model)
            self.session.commit()

    def delete_for_task(self, task_id: int) -> int:
        if not fits_stored_integer(task_id):
            return 0
        with self._storage_errors("deleting task notifications"):
            removed = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.task_id == task_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        return removed

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            self.session.rollback()
            logger.exception("Notification storage failed while %s", action)
            raise StorageFault(f"Notification storage failed while {action}") from exc

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.organization_id = notification.organization_id
        model.type = NotificationType(notification.type).value
        model.title = notification.title
        model.message = notification.message
        model.task_id = notification.task_id
        model.reading_id = notification.reading_id
        model.is_read = False
        model.created_at = ensure_app_naive_datetime(now_in_app_timezone())
        model.updated_at = None

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            organization_id=model.organization_id,
            task_id=model.task_id,
            reading_id=model.reading_id,
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
