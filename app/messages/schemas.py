from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("Message text is required")
    return v


class MessageCreate(BaseModel):
    receiver_id: int = Field(..., gt=0)
    text: str = Field(..., min_length=1, max_length=5000)

    _check_text = field_validator("text")(_not_blank)


class MessageUpdate(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)

    _check_text = field_validator("text")(_not_blank)


class UserMessage(BaseModel):
    id: int
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    id: int
    sender: UserMessage
    receiver: UserMessage
    text: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
