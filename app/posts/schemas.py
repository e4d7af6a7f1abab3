from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from app.users.schemas import UserShort


class PostCreate(BaseModel):
    description: str = Field(..., min_length=1)
    images: list[HttpUrl] = []
    group_id: Optional[int] = Field(None, gt=0)

    @field_validator("description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description is required")
        return v


class PostUpdate(BaseModel):
    description: Optional[str] = None
    images: list[HttpUrl] = []


class PostOut(BaseModel):
    id: int
    user: UserShort
    description: Optional[str] = None
    images: list[str] = []
    group_id: Optional[int] = None
    created_at: datetime
    likes_count: int = 0
    comments_count: int = 0
    reposts_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class CountOut(BaseModel):
    post_id: int
    count: int
