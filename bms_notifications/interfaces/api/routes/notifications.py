"""Endpoints for listing, acknowledging and deleting notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from bms_notifications.application.services import NotificationService
from bms_notifications.config import get_settings
from bms_notifications.domain.entities import Notification
from bms_notifications.domain.exceptions import (
    NotFoundOrForbidden,
    StorageFault,
    ValidationError,
)
from bms_notifications.domain.repositories import MAX_STORED_INTEGER
from bms_notifications.interfaces.api.dependencies import (
    get_current_user_id,
    get_notification_service,
)
from bms_notifications.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationPageRead,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_STORAGE_UNAVAILABLE = "Notification service is temporarily unavailable"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _storage_unavailable(exc: StorageFault) -> HTTPException:
    logger.error("Notification request failed: %s", exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_STORAGE_UNAVAILABLE
    )


@router.get("/", response_model=NotificationPageRead)
def list_notifications(
    skip: int = Query(
        0, ge=0, le=MAX_STORED_INTEGER, description="Number of notifications to skip"
    ),
    take: int | None = Query(
        None,
        le=MAX_STORED_INTEGER,
        description="Maximum number of notifications to return",
    ),
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationPageRead:
    """Return the authenticated user's notifications, most recent first."""

    if take is None:
        take = get_settings().notifications_page_size
    try:
        page = service.get_user_notifications(user_id, skip=skip, take=take)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageFault as exc:
        raise _storage_unavailable(exc) from exc
    return NotificationPageRead.model_validate(page)


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountRead:
    try:
        count = service.get_unread_count(user_id)
    except StorageFault as exc:
        raise _storage_unavailable(exc) from exc
    return UnreadCountRead(unread_count=count)


@router.put("/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_as_read(
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> MarkAllReadResponse:
    """Acknowledge every unread notification of the authenticated user."""

    try:
        updated = service.mark_all_as_read(user_id)
    except StorageFault as exc:
        raise _storage_unavailable(exc) from exc
    return MarkAllReadResponse(updated=updated)


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: int = Path(..., ge=1, le=MAX_STORED_INTEGER),
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    """Acknowledge the notification identified by ``notification_id``."""

    try:
        notification = service.mark_as_read(user_id, notification_id)
    except NotFoundOrForbidden as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageFault as exc:
        raise _storage_unavailable(exc) from exc
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int = Path(..., ge=1, le=MAX_STORED_INTEGER),
    user_id: int = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service),
) -> Response:
    """Delete the notification identified by ``notification_id``."""

    try:
        service.delete_notification(user_id, notification_id)
    except NotFoundOrForbidden as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageFault as exc:
        raise _storage_unavailable(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
