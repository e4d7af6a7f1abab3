from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

COLOR_PATTERN = r"^#[A-Fa-f0-9]{6}$"


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    is_private: bool

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v


class GroupUpdate(BaseModel):
    """Частичное обновление: None означает «не менять поле»."""
    description: Optional[str] = Field(None, max_length=255)
    img_url: Optional[str] = Field(None, max_length=2083)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)

    @field_validator("description", "img_url", "color")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Value must not be empty or blank")
        return v


class GroupMemberRequest(BaseModel):
    user_id: int = Field(..., gt=0)
    status: str = "PENDING"


class GroupOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    color: str
    owner_id: int
    is_private: bool
    is_member: bool = False

    model_config = ConfigDict(from_attributes=True)
