from uuid import UUID

from pydantic import Field

from healthcare_platform.models.notification import DeliveryStatus, NotificationChannel
from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class NotificationCreate(CreateModel):
    organization_id: UUID | None = None
    recipient_user_id: UUID
    channel: NotificationChannel
    notification_type: str = Field(..., min_length=1, max_length=50)
    subject: str | None = Field(default=None, max_length=255)
    body: str = Field(..., min_length=1)
    delivery_status: DeliveryStatus = DeliveryStatus.PENDING
    sent_at: UtcDateTime | None = None


class NotificationUpdate(UpdateModel):
    delivery_status: DeliveryStatus | None = None
    sent_at: UtcDateTime | None = None


class NotificationSearch(SearchRequest):
    organization_id: UUID | None = None
    recipient_user_id: UUID | None = None
    channel: NotificationChannel | None = None
    notification_type: str | None = None
    delivery_status: DeliveryStatus | None = None
    subject: str | None = None
    sent_at_from: UtcDateTime | None = None
    sent_at_to: UtcDateTime | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class NotificationResponse(ResponseModel):
    id: UUID
    organization_id: UUID | None
    recipient_user_id: UUID
    channel: str
    notification_type: str
    subject: str | None
    body: str
    delivery_status: str
    sent_at: IsoDateTime | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
