"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from bms_notifications.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_created", "user_id", "created_at"),
        Index("ix_notification_user_is_read", "user_id", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    organization_id = Column(Integer, nullable=True, index=True)
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    task_id = Column(Integer, nullable=True, index=True)
    reading_id = Column(Integer, nullable=True, index=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
