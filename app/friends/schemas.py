from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.friends.models import FriendStatus


class FriendOut(BaseModel):
    id: int
    user_id: int
    friend_id: int
    status: FriendStatus
    created_at: datetime
    accepted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FriendshipOut(BaseModel):
    user_id: int
    friend_id: int
    is_friend: bool
