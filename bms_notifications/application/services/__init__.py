"""Application services."""

from .notification_service import DEFAULT_PAGE_SIZE, NotificationService

__all__ = ["DEFAULT_PAGE_SIZE", "NotificationService"]
