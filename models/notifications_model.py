from enum import Enum
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class NotificationType(str, Enum):
    APPLICATION_RECEIVED = "application_received"
    APPLICATION_STATUS_CHANGED = "application_status_changed"

class NotificationCreate(BaseModel):
    recipient_id: str
    sender_id: str
    sender_name: str
    notification_type: NotificationType
    source_id: str  # the application the event is about
    message: str

class NotificationResponse(BaseModel):
    id: str
    recipient_id: str
    sender_id: str
    sender_name: str
    notification_type: NotificationType
    source_id: str
    message: str
    is_read: bool
    created_at: datetime
    read_at: Optional[datetime] = None
