from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class Provider(str, Enum):
    LOCAL = "LOCAL"
    GOOGLE = "GOOGLE"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    # У пользователей, пришедших через Google, пароля нет
    password: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[Optional[Gender]] = mapped_column(SQLEnum(Gender, name="genderenum"), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    birthdate: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(2083), nullable=True)
    header_photo_url: Mapped[Optional[str]] = mapped_column(String(2083), nullable=True)
    home_city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    current_city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    provider: Mapped[Provider] = mapped_column(
        SQLEnum(Provider, name="providerenum"), default=Provider.LOCAL, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, onupdate=datetime.utcnow, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
