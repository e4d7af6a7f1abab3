import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, field_validator

from app.users.models import Gender

PHONE_PATTERN = re.compile(r"^[1-9]\d{1,3}\d{4,10}$")
MIN_AGE_YEARS = 10


class UserShort(BaseModel):
    id: int
    first_name: str
    last_name: str
    avatar_url: Optional[str] = None
    birthdate: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class UserDetails(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    birthdate: Optional[date] = None
    avatar_url: Optional[str] = None
    header_photo_url: Optional[str] = None
    home_city: Optional[str] = None
    current_city: Optional[str] = None
    verified: bool = False
    created_at: datetime
    friends: list[UserShort] = []
    friends_requests: list[UserShort] = []

    model_config = ConfigDict(from_attributes=True)


class FriendDetails(UserDetails):
    mutual_friends: list[UserShort] = []


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=255)
    last_name: Optional[str] = Field(None, min_length=2, max_length=255)
    phone: Optional[str] = None
    birthdate: Optional[date] = None
    avatar_url: Optional[HttpUrl] = None
    header_photo_url: Optional[HttpUrl] = None
    home_city: Optional[str] = Field(None, min_length=2, max_length=255)
    current_city: Optional[str] = Field(None, min_length=2, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not PHONE_PATTERN.match(v):
            raise ValueError(
                "Invalid phone number. It should follow the format: 1 to 3 digits for country code "
                "and 4 to 10 digits for the subscriber number."
            )
        return v

    @field_validator("birthdate")
    @classmethod
    def valid_birthdate(cls, v: Optional[date]) -> Optional[date]:
        if v is None:
            return v
        today = date.today()
        if v >= today:
            raise ValueError("Birthdate must be in the past")
        age = today.year - v.year - ((today.month, today.day) < (v.month, v.day))
        if age < MIN_AGE_YEARS:
            raise ValueError(f"You must be at least {MIN_AGE_YEARS} years old")
        return v

    def to_values(self) -> dict:
        """Поля для записи в БД: URL приводим к строкам, None отбрасываем."""
        values = self.model_dump(exclude_none=True)
        for key in ("avatar_url", "header_photo_url"):
            if key in values:
                values[key] = str(values[key])
        return values
