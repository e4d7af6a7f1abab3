from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.notifications.models import NotificationType
from app.users.schemas import UserShort


class NotificationOut(BaseModel):
    id: int
    type: NotificationType
    is_read: bool
    post_id: int
    sender: UserShort
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
