"""Domain entities exposed by the application."""

from .notification import Notification, NotificationPage, NotificationType, Pagination

__all__ = [
    "Notification",
    "NotificationPage",
    "NotificationType",
    "Pagination",
]
