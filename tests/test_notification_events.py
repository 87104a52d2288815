"""Tests for the task and reading notification helpers."""

from __future__ import annotations

import pytest

from bms_notifications.application.services import NotificationService
from bms_notifications.application.use_cases.notifications import (
    notify_reading_approved,
    notify_reading_commented,
    notify_reading_rejected,
    notify_reading_submitted,
    notify_task_assigned,
)
from bms_notifications.domain.entities import NotificationType
from bms_notifications.infrastructure.repositories import InMemoryNotificationRepository


@pytest.fixture()
def service() -> NotificationService:
    return NotificationService(InMemoryNotificationRepository())


def _only_notification(service: NotificationService, user_id: int):
    page = service.get_user_notifications(user_id)
    assert page.pagination.total == 1
    return page.notifications[0]


def test_notify_task_assigned_reaches_every_assignee(service: NotificationService) -> None:
    created = notify_task_assigned(
        service,
        task_id=21,
        task_title="Boiler inspection",
        organization_id=5,
        assignee_ids=[3, 4],
    )

    assert created == 2
    for user_id in (3, 4):
        notification = _only_notification(service, user_id)
        assert notification.type is NotificationType.TASK_ASSIGNED
        assert notification.title == "New Task Assigned"
        assert notification.message == "You have been assigned a new task: Boiler inspection"
        assert notification.task_id == 21
        assert notification.organization_id == 5


def test_notify_task_assigned_without_assignees(service: NotificationService) -> None:
    assert (
        notify_task_assigned(
            service, task_id=1, task_title="Idle", organization_id=None, assignee_ids=[]
        )
        == 0
    )


def test_notify_reading_submitted(service: NotificationService) -> None:
    notify_reading_submitted(
        service,
        reading_id=8,
        task_title="Water meter",
        submitted_by_name="Ana Diaz",
        organization_id=5,
        reviewer_ids=[10],
    )

    notification = _only_notification(service, 10)
    assert notification.type is NotificationType.READING_SUBMITTED
    assert notification.message == "Reading submitted for Water meter by Ana Diaz"
    assert notification.reading_id == 8


@pytest.mark.parametrize(
    ("helper", "expected_type", "expected_message"),
    [
        (
            notify_reading_approved,
            NotificationType.READING_APPROVED,
            "Your submitted reading has been approved: Looks good",
        ),
        (
            notify_reading_rejected,
            NotificationType.READING_REJECTED,
            "Your submitted reading has been rejected: Looks good",
        ),
    ],
)
def test_reading_review_notifications(
    service: NotificationService, helper, expected_type, expected_message
) -> None:
    notification = helper(
        service,
        reading_id=8,
        task_id=21,
        organization_id=5,
        submitted_by_id=3,
        comment="Looks good",
    )

    assert notification.user_id == 3
    assert notification.type is expected_type
    assert notification.message == expected_message
    assert notification.task_id == 21
    assert notification.reading_id == 8


def test_reading_review_without_comment(service: NotificationService) -> None:
    notification = notify_reading_rejected(
        service, reading_id=8, task_id=None, organization_id=5, submitted_by_id=3
    )

    assert notification.message == "Your submitted reading has been rejected"


def test_comment_notification_truncates_preview(service: NotificationService) -> None:
    comment = "x" * 80

    notification = notify_reading_commented(
        service,
        reading_id=8,
        task_id=21,
        organization_id=5,
        submitted_by_id=3,
        author_id=10,
        comment=comment,
    )

    assert notification is not None
    assert notification.type is NotificationType.TASK_COMMENTED
    assert notification.message == (
        "A new comment has been added to your reading submission: "
        f'"{"x" * 50}..."'
    )


def test_comment_by_submitter_is_not_notified(service: NotificationService) -> None:
    result = notify_reading_commented(
        service,
        reading_id=8,
        task_id=21,
        organization_id=5,
        submitted_by_id=3,
        author_id=3,
        comment="Self note",
    )

    assert result is None
    assert service.get_unread_count(3) == 0
