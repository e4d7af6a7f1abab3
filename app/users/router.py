from fastapi import APIRouter, Query

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.posts import services as post_services
from app.posts.schemas import PostOut
from app.responses import ApiResponse, Page
from app.users import services
from app.users.schemas import FriendDetails, UserDetails, UserShort, UserUpdate

router = APIRouter(prefix="/api/users", tags=["User"])


@router.get("/current", response_model=ApiResponse[UserDetails])
async def get_current_user(session: SessionDep, current_user: CurrentUser):
    details = await services.get_current_user_details(session, current_user.id)
    return ApiResponse(message="User details retrieved successfully", data=details)


@router.get("/search", response_model=ApiResponse[list[UserShort]])
async def search_users(session: SessionDep, current_user: CurrentUser, query: str = Query(..., min_length=1)):
    users = await services.search_users_by_full_name(session, query)
    return ApiResponse(message="Users retrieved successfully", data=users)


@router.get("/", response_model=ApiResponse[Page[UserShort]])
async def get_all_users(
    session: SessionDep,
    current_user: CurrentUser,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
):
    users = await services.get_all_users_except_current(session, current_user.id, page, size)
    return ApiResponse(message="Users retrieved successfully", data=users)


@router.put("/", response_model=ApiResponse[UserDetails])
async def update_user(data: UserUpdate, session: SessionDep, current_user: CurrentUser):
    details = await services.update_user(session, current_user.id, data)
    return ApiResponse(message="User updated successfully", data=details)


@router.get("/{user_id}", response_model=ApiResponse[FriendDetails])
async def get_user(user_id: int, session: SessionDep, current_user: CurrentUser):
    details = await services.get_friend_details(session, user_id, current_user.id)
    return ApiResponse(message="User details retrieved successfully", data=details)


@router.get("/{user_id}/posts", response_model=ApiResponse[list[PostOut]])
async def get_user_posts(user_id: int, session: SessionDep, current_user: CurrentUser):
    posts = await post_services.get_user_posts(session, user_id)
    return ApiResponse(message="User posts retrieved successfully", data=posts)
