from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Achievements(str, Enum):
    SWEET_SIGNED_IN = "Sweet & Signed In"
    PINK_PROFILE = "Pink Profile"
    SUGAR_RUSH = "Sugar Rush"
    YOU_ARE_INVITED = "You're invited"
    BUZZ_STARTED = "Buzz Started"
    FIRST_HEARTBEAT = "First Heartbeat"
    VIBE_CREATOR = "Vibe Creator"
    COMMENT_KING = "Comment King"
    SOFT_SUPPORTER = "Soft Supporter"
    TAG_ME_LATER = "Tag Me Later"
    SWEET_TALKER = "Sweet Talker"
    AESTHETIC_DROP = "Aesthetic Drop"
    MAIN_CHARACTER_ENERGY = "Main Character Energy"
    WHIMSICAL_WONDER = "Whimsical Wonder"
    KIND_SOUL = "Kind Soul"
    BUZZLIGHT_STAR = "Buzzlight Star"
    NIGHT_SCROLLER = "Night Scroller"
    VANISHED_AND_REBORN = "Vanished & Reborn"
    TREND_STARTER = "Trend Starter"
    BUZZ_ROYALTY = "Buzz Royalty"
    BEE_BABY = "Bee Baby"
    GOLDEN_BUZZ = "Golden Buzz"
    BUZZ_GIFTER = "Buzz Gifter"
    STYLE_KING = "Style King"
    PREMIUM_PLAYER = "Premium Player"

    def __str__(self) -> str:
        return self.value


PREMIUM_ACHIEVEMENTS = {
    Achievements.PREMIUM_PLAYER,
    Achievements.GOLDEN_BUZZ,
    Achievements.BUZZ_GIFTER,
    Achievements.BUZZ_ROYALTY,
}


class Achievement(Base):
    __tablename__ = "achievements"

    id: Mapped[int] = mapped_column(primary_key=True, index=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Achievement id={self.id} name={self.name!r}>"


class UserAchievement(Base):
    __tablename__ = "user_achievements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id: Mapped[int] = mapped_column(Integer, ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    achievement = relationship("Achievement", lazy="selectin")

    __table_args__ = (UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),)
