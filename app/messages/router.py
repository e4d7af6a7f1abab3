from fastapi import APIRouter, Query, status

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.messages import services
from app.messages.schemas import MessageCreate, MessageOut, MessageUpdate
from app.responses import ApiResponse, Page

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.post("/create", response_model=ApiResponse[MessageOut], status_code=status.HTTP_201_CREATED)
async def create(data: MessageCreate, session: SessionDep, current_user: CurrentUser):
    message = await services.create(session, current_user.id, data.receiver_id, data.text)
    return ApiResponse(message="Message created", data=message)


@router.get("/{friend_id}", response_model=ApiResponse[Page[MessageOut]])
async def get_messages_with_friend(
    friend_id: int,
    session: SessionDep,
    current_user: CurrentUser,
    page: int = Query(0, ge=0),
    size: int = Query(20, ge=1, le=100),
):
    messages = await services.get_messages_with_friend(session, current_user.id, friend_id, page, size)
    return ApiResponse(message="Messages retrieved", data=messages)


@router.put("/edit/{message_id}", response_model=ApiResponse[MessageOut])
async def edit(message_id: int, data: MessageUpdate, session: SessionDep, current_user: CurrentUser):
    message = await services.update(session, message_id, current_user.id, data.text)
    return ApiResponse(message="Message updated", data=message)


@router.put("/read/{message_id}", response_model=ApiResponse[MessageOut])
async def mark_read(message_id: int, session: SessionDep, current_user: CurrentUser):
    message = await services.read(session, message_id, current_user.id)
    return ApiResponse(message="Message marked as read", data=message)


@router.delete("/delete/{message_id}", response_model=ApiResponse[None])
async def delete(message_id: int, session: SessionDep, current_user: CurrentUser):
    await services.delete(session, message_id, current_user.id)
    return ApiResponse(message="Message deleted")
