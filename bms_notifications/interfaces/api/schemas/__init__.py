from .notification import (
    MarkAllReadResponse,
    NotificationPageRead,
    NotificationRead,
    PaginationRead,
    UnreadCountRead,
)

__all__ = [
    "MarkAllReadResponse",
    "NotificationPageRead",
    "NotificationRead",
    "PaginationRead",
    "UnreadCountRead",
]
