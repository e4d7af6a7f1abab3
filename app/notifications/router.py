from fastapi import APIRouter

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.notifications import services
from app.notifications.schemas import NotificationOut
from app.responses import ApiResponse

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("/", response_model=ApiResponse[list[NotificationOut]])
async def get_notifications(session: SessionDep, current_user: CurrentUser, unread_only: bool = False):
    notifications = await services.get_notifications(session, current_user.id, unread_only)
    return ApiResponse(
        message="Notifications retrieved",
        data=[NotificationOut.model_validate(n) for n in notifications],
    )


@router.put("/read-all", response_model=ApiResponse[int])
async def mark_all_as_read(session: SessionDep, current_user: CurrentUser):
    updated = await services.mark_all_as_read(session, current_user.id)
    return ApiResponse(message="All notifications marked as read", data=updated)


@router.put("/{notification_id}/read", response_model=ApiResponse[NotificationOut])
async def mark_as_read(notification_id: int, session: SessionDep, current_user: CurrentUser):
    notification = await services.mark_as_read(session, notification_id, current_user.id)
    return ApiResponse(message="Notification marked as read", data=NotificationOut.model_validate(notification))
