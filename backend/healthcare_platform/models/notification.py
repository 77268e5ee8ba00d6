from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from healthcare_platform.core.database import Base
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    IN_APP = "in_app"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    READ = "read"


class Notification(TimestampMixin, Base):
    __tablename__ = "notifications"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    recipient_user_id = Column(UUIDType, nullable=False, index=True)
    channel = Column(String(20), nullable=False)
    notification_type = Column(String(50), nullable=False)
    subject = Column(String(255), nullable=True)
    body = Column(Text, nullable=False)
    delivery_status = Column(String(20), nullable=False, default=DeliveryStatus.PENDING.value)
    sent_at = Column(DateTime(timezone=True), nullable=True)
