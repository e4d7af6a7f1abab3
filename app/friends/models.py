from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Integer, DateTime, Enum as SQLEnum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.database import Base


class FriendStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Friend(Base):
    """
    Направленное ребро дружбы.
    Заявка от R к T хранится как (user_id=T, friend_id=R): получатель отвечает
    на ребро со своим id в user_id. Обратное ребро при принятии не создаётся.
    """
    __tablename__ = "friends"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[FriendStatus] = mapped_column(
        SQLEnum(FriendStatus, name="friendstatusenum"), default=FriendStatus.PENDING, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    accepted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # 🔗 связи
    user = relationship("User", foreign_keys="Friend.user_id", lazy="selectin")
    friend = relationship("User", foreign_keys="Friend.friend_id", lazy="selectin")

    __table_args__ = (UniqueConstraint("user_id", "friend_id", name="uq_user_friend"),)

    def __repr__(self) -> str:
        return f"<Friend user_id={self.user_id} friend_id={self.friend_id} status={self.status}>"
