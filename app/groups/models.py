from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class GroupRole(str, Enum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class GroupJoinStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Group(Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True, index=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(2083), nullable=True)
    color: Mapped[str] = mapped_column(String(7), default="#FFFFFF", nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    owner_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    owner = relationship("User", lazy="selectin")
    # Дочерние строки удаляет БД (ON DELETE CASCADE): загруженные коллекции могут быть неполными
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan", passive_deletes=True)
    join_requests = relationship(
        "GroupJoinRequest", back_populates="group", cascade="all, delete-orphan", passive_deletes=True
    )
    posts = relationship("Post", back_populates="group", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Group id={self.id} name={self.name!r} private={self.is_private}>"


class GroupMember(Base):
    __tablename__ = "group_members"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[GroupRole] = mapped_column(SQLEnum(GroupRole, name="grouproleenum"), default=GroupRole.MEMBER, nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("Group", back_populates="members")
    user = relationship("User", lazy="selectin")

    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_member"),)


class GroupJoinRequest(Base):
    __tablename__ = "group_join_requests"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    initiator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[GroupJoinStatus] = mapped_column(
        SQLEnum(GroupJoinStatus, name="groupjoinstatusenum"), default=GroupJoinStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    group = relationship("Group", back_populates="join_requests")
    user = relationship("User", foreign_keys="GroupJoinRequest.user_id", lazy="selectin")
    initiator = relationship("User", foreign_keys="GroupJoinRequest.initiator_id", lazy="selectin")

    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_join_request"),)
