"""
Регистрация всех моделей в metadata.
Импортируем ВСЕ модели, чтобы SQLAlchemy могла разрешить строковые relationships
(используется в main, миграциях, скриптах и тестах).
"""
from app.users.models import User, Gender, Provider
from app.auth.models import VerificationToken
from app.friends.models import Friend, FriendStatus
from app.groups.models import Group, GroupMember, GroupJoinRequest, GroupRole, GroupJoinStatus
from app.posts.models import Post, PostImage, Like, Repost
from app.comments.models import Comment
from app.messages.models import Message
from app.notifications.models import Notification, NotificationType
from app.achievements.models import Achievement, UserAchievement, Achievements

__all__ = [
    "User", "Gender", "Provider",
    "VerificationToken",
    "Friend", "FriendStatus",
    "Group", "GroupMember", "GroupJoinRequest", "GroupRole", "GroupJoinStatus",
    "Post", "PostImage", "Like", "Repost",
    "Comment",
    "Message",
    "Notification", "NotificationType",
    "Achievement", "UserAchievement", "Achievements",
]
