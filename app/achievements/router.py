from fastapi import APIRouter

from app.achievements import services
from app.achievements.schemas import AchievementOut
from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.responses import ApiResponse

router = APIRouter(prefix="/api/achievements", tags=["Achievements"])


@router.get("/achievements", response_model=ApiResponse[list[AchievementOut]])
async def get_user_achievements(session: SessionDep, current_user: CurrentUser):
    achievements = await services.get_all_achievements_of_user(session, current_user.id)
    return ApiResponse(
        message="User achievements retrieved successfully",
        data=[AchievementOut.model_validate(a) for a in achievements],
    )
