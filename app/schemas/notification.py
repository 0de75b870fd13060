from datetime import datetime
from typing import Optional

from app.core.schemas import CamelModel
from app.models.notification import NotificationType


class NotificationResponse(CamelModel):
    id: int
    user_id: int
    type: NotificationType
    message: str
    is_read: bool
    related_id: Optional[int] = None
    created_at: Optional[datetime] = None
