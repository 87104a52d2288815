"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from bms_notifications.domain.entities import NotificationType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    organization_id: int | None = None
    type: NotificationType
    title: str
    message: str
    task_id: int | None = None
    reading_id: int | None = None
    is_read: bool
    created_at: datetime
    updated_at: datetime | None = None


class PaginationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    skip: int
    take: int
    pages: int


class NotificationPageRead(BaseModel):
    """A page of notifications plus the pagination window."""

    model_config = ConfigDict(from_attributes=True)

    notifications: list[NotificationRead] = Field(default_factory=list)
    pagination: PaginationRead


class UnreadCountRead(BaseModel):
    unread_count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseModel):
    """Number of notifications flipped to read by a bulk acknowledgement."""

    updated: int = Field(..., ge=0)


__all__ = [
    "MarkAllReadResponse",
    "NotificationPageRead",
    "NotificationRead",
    "PaginationRead",
    "UnreadCountRead",
]
