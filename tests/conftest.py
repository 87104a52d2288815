"""Shared pytest configuration for the notification tests."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "bms_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

from bms_notifications.domain.exceptions import StorageFault  # noqa: E402
from bms_notifications.domain.repositories import NotificationStore  # noqa: E402


class FailingNotificationStore(NotificationStore):
    """Store whose every operation fails like an unreachable database."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise StorageFault(f"{operation} failed")

    def insert(self, notification):
        self._fail("insert")

    def insert_many(self, notifications):
        self._fail("insert_many")

    def get(self, notification_id):
        self._fail("get")

    def list_for_user(self, user_id, *, skip, limit):
        self._fail("list_for_user")

    def count_for_user(self, user_id):
        self._fail("count_for_user")

    def count_unread_for_user(self, user_id):
        self._fail("count_unread_for_user")

    def update(self, notification_id, changes):
        self._fail("update")

    def mark_all_read_for_user(self, user_id):
        self._fail("mark_all_read_for_user")

    def delete(self, notification_id):
        self._fail("delete")

    def delete_for_task(self, task_id):
        self._fail("delete_for_task")


@pytest.fixture()
def failing_store() -> FailingNotificationStore:
    return FailingNotificationStore()
