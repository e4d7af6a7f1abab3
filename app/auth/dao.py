from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import VerificationToken
from app.dao.base import BaseDAO


class VerificationTokenDAO(BaseDAO):
    model = VerificationToken

    @classmethod
    async def find_by_token(cls, session: AsyncSession, token: str) -> Optional[VerificationToken]:
        return await cls.find_one_or_none(session, token=token)
