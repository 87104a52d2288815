"""Utility helpers to generate notifications for task and reading events."""

from __future__ import annotations

from collections.abc import Iterable

from bms_notifications.application.services import NotificationService
from bms_notifications.domain.entities import Notification, NotificationType

_COMMENT_PREVIEW_LENGTH = 50


def notify_task_assigned(
    service: NotificationService,
    *,
    task_id: int,
    task_title: str,
    organization_id: int | None,
    assignee_ids: Iterable[int],
) -> int:
    """Tell every assigned technician about a new task."""

    return service.create_notifications(
        user_ids=assignee_ids,
        type=NotificationType.TASK_ASSIGNED,
        title="New Task Assigned",
        message=f"You have been assigned a new task: {task_title}",
        organization_id=organization_id,
        task_id=task_id,
    )


def notify_reading_submitted(
    service: NotificationService,
    *,
    reading_id: int,
    task_title: str,
    submitted_by_name: str,
    organization_id: int | None,
    reviewer_ids: Iterable[int],
) -> int:
    """Inform supervisors and admins that a reading awaits review."""

    return service.create_notifications(
        user_ids=reviewer_ids,
        type=NotificationType.READING_SUBMITTED,
        title="New Reading Submitted",
        message=f"Reading submitted for {task_title} by {submitted_by_name}",
        organization_id=organization_id,
        reading_id=reading_id,
    )


def notify_reading_approved(
    service: NotificationService,
    *,
    reading_id: int,
    task_id: int | None,
    organization_id: int | None,
    submitted_by_id: int,
    comment: str | None = None,
) -> Notification:
    """Notify the technician who submitted the reading that it was approved."""

    return service.create_notification(
        user_id=submitted_by_id,
        type=NotificationType.READING_APPROVED,
        title="Reading Approved",
        message=f"Your submitted reading has been approved{_comment_suffix(comment)}",
        organization_id=organization_id,
        task_id=task_id,
        reading_id=reading_id,
    )


def notify_reading_rejected(
    service: NotificationService,
    *,
    reading_id: int,
    task_id: int | None,
    organization_id: int | None,
    submitted_by_id: int,
    comment: str | None = None,
) -> Notification:
    """Notify the technician who submitted the reading that it was rejected."""

    return service.create_notification(
        user_id=submitted_by_id,
        type=NotificationType.READING_REJECTED,
        title="Reading Rejected",
        message=f"Your submitted reading has been rejected{_comment_suffix(comment)}",
        organization_id=organization_id,
        task_id=task_id,
        reading_id=reading_id,
    )


def notify_reading_commented(
    service: NotificationService,
    *,
    reading_id: int,
    task_id: int | None,
    organization_id: int | None,
    submitted_by_id: int,
    author_id: int,
    comment: str,
) -> Notification | None:
    """Let the submitter know someone else commented on their reading.

    Returns ``None`` when the author is commenting on their own reading.
    """

    if author_id == submitted_by_id:
        return None

    preview = comment[:_COMMENT_PREVIEW_LENGTH]
    return service.create_notification(
        user_id=submitted_by_id,
        type=NotificationType.TASK_COMMENTED,
        title="New Comment on Your Reading",
        message=(
            "A new comment has been added to your reading submission: "
            f'"{preview}..."'
        ),
        organization_id=organization_id,
        task_id=task_id,
        reading_id=reading_id,
    )


def _comment_suffix(comment: str | None) -> str:
    return f": {comment}" if comment else ""


__all__ = [
    "notify_reading_approved",
    "notify_reading_commented",
    "notify_reading_rejected",
    "notify_reading_submitted",
    "notify_task_assigned",
]
