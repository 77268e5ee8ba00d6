from __future__ import annotations

from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.notification import Notification
from healthcare_platform.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification
    label = "Notification"
    filters = (
        exact("organization_id"),
        exact("recipient_user_id"),
        exact("channel"),
        exact("notification_type"),
        exact("delivery_status"),
        contains("subject", case_sensitive=False),
        *date_range("sent_at"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "sent_at", "delivery_status", "channel")
