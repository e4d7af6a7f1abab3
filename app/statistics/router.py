from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.responses import ApiResponse
from app.statistics import services

router = APIRouter(prefix="/api/statistics", tags=["Statistics"])


@router.get("/get-statistic-for-all-time", response_model=ApiResponse[dict[str, int]])
async def get_statistic_for_all_time(session: SessionDep, current_user: CurrentUser):
    statistic = await services.get_all_time_statistic(session, current_user.id)
    return ApiResponse(message="Statistic for all time", data=statistic)


@router.get("/get-statistic-for-last-days/{days}", response_model=ApiResponse[dict[str, int]])
async def get_statistic_for_last_days(days: int, session: SessionDep, current_user: CurrentUser):
    statistic = await services.get_statistic_for_last_days(session, current_user.id, days)
    return ApiResponse(message=f"Statistic for last {days} days", data=statistic)
