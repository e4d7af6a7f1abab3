from typing import Optional

from fastapi import APIRouter, status

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.friends import services
from app.friends.schemas import FriendOut, FriendshipOut
from app.responses import ApiResponse
from app.users.schemas import UserShort
from app.users.services import to_short

router = APIRouter(prefix="/api/friends", tags=["Friends"])


@router.post("/add/{friend_id}", response_model=ApiResponse[FriendOut], status_code=status.HTTP_201_CREATED)
async def add_friend(friend_id: int, session: SessionDep, current_user: CurrentUser):
    edge = await services.add_friend_request(session, current_user.id, friend_id)
    return ApiResponse(message="Friend request sent", data=FriendOut.model_validate(edge))


@router.post("/respond/{friend_id}/{status}", response_model=ApiResponse[Optional[FriendOut]])
async def respond_to_friend_request(friend_id: int, status: str, session: SessionDep, current_user: CurrentUser):
    """Ответ на входящую заявку от friend_id. status: ACCEPTED / DECLINED, регистр не важен."""
    edge = await services.respond_to_friend_request(session, current_user.id, friend_id, status)
    if edge is None:
        return ApiResponse(message="Friend request declined")
    return ApiResponse(message="Friend request accepted", data=FriendOut.model_validate(edge))


@router.delete("/delete/{friend_id}", response_model=ApiResponse[None])
async def delete_friend(friend_id: int, session: SessionDep, current_user: CurrentUser):
    await services.delete_friend(session, current_user.id, friend_id)
    return ApiResponse(message="Friend deleted")


@router.get("/get-friends", response_model=ApiResponse[list[UserShort]])
async def get_friends(session: SessionDep, current_user: CurrentUser):
    friends = await services.get_all_friend_users(session, current_user.id)
    return ApiResponse(message="Friends retrieved successfully", data=to_short(friends))


@router.get("/get-requests", response_model=ApiResponse[list[UserShort]])
async def get_requests(session: SessionDep, current_user: CurrentUser):
    users = await services.get_all_users_who_sent_request(session, current_user.id)
    return ApiResponse(message="Friend requests retrieved successfully", data=to_short(users))


@router.get("/sent-requests", response_model=ApiResponse[list[UserShort]])
async def get_sent_requests(session: SessionDep, current_user: CurrentUser):
    users = await services.get_all_users_whom_sent_request(session, current_user.id)
    return ApiResponse(message="Sent friend requests retrieved successfully", data=to_short(users))


@router.get("/recommended", response_model=ApiResponse[list[UserShort]])
async def get_recommended(session: SessionDep, current_user: CurrentUser):
    users = await services.get_recommended_friends(session, current_user.id)
    return ApiResponse(message="Recommended friends retrieved successfully", data=to_short(users))


@router.get("/is-friend/{friend_id}", response_model=ApiResponse[FriendshipOut])
async def is_friend(friend_id: int, session: SessionDep, current_user: CurrentUser):
    result = await services.is_friend(session, current_user.id, friend_id)
    return ApiResponse(
        message="Friendship status retrieved",
        data=FriendshipOut(user_id=current_user.id, friend_id=friend_id, is_friend=result),
    )
