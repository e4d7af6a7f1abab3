from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.users.schemas import UserShort


class CommentRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment text is required")
        return v


class CommentOut(BaseModel):
    id: int
    post_id: int
    user: UserShort
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
