"""Error conditions raised by the notification core."""

from __future__ import annotations

NOT_FOUND_OR_FORBIDDEN_MESSAGE = (
    "Notification not found or you do not have permission to access it"
)


class NotificationError(Exception):
    """Base class for every failure surfaced by the notification core."""


class ValidationError(NotificationError, ValueError):
    """Raised when a request is rejected before reaching storage."""


class NotFoundOrForbidden(NotificationError, ValueError):
    """Raised when a notification is absent or owned by another user.

    Both situations share this type and message so callers cannot probe for
    other users' notifications.
    """

    def __init__(self, message: str = NOT_FOUND_OR_FORBIDDEN_MESSAGE) -> None:
        super().__init__(message)


class StorageFault(NotificationError):
    """Opaque failure coming from the persistence layer."""


__all__ = [
    "NOT_FOUND_OR_FORBIDDEN_MESSAGE",
    "NotFoundOrForbidden",
    "NotificationError",
    "StorageFault",
    "ValidationError",
]
