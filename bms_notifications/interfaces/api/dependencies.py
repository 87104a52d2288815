"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bms_notifications.application.services import NotificationService
from bms_notifications.infrastructure.database import get_db
from bms_notifications.infrastructure.repositories import NotificationRepository
from bms_notifications.infrastructure.security import user_id_from_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    """Return the identifier of the authenticated caller."""

    try:
        return user_id_from_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Return a :class:`NotificationService` bound to the request session."""

    return NotificationService(NotificationRepository(db))
