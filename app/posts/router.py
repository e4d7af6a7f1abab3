from fastapi import APIRouter, Query, status

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.posts import services
from app.posts.schemas import CountOut, PostCreate, PostOut, PostUpdate
from app.responses import ApiResponse, Page

router = APIRouter(prefix="/api/posts", tags=["Posts"])


@router.post("/create", response_model=ApiResponse[PostOut], status_code=status.HTTP_201_CREATED)
async def create_post(data: PostCreate, session: SessionDep, current_user: CurrentUser):
    post = await services.create_post(session, current_user.id, data)
    return ApiResponse(message="Post was created", data=post)


@router.get("/feed", response_model=ApiResponse[Page[PostOut]])
async def get_feed(
    session: SessionDep,
    current_user: CurrentUser,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
):
    """Лента: посты пользователя и его друзей, новые сверху."""
    feed = await services.get_user_and_friends_posts(session, current_user.id, page, size)
    return ApiResponse(message="Posts retrieved successfully", data=feed)


@router.get("/group/{group_id}", response_model=ApiResponse[list[PostOut]])
async def get_group_posts(group_id: int, session: SessionDep, current_user: CurrentUser):
    posts = await services.get_group_posts(session, group_id)
    return ApiResponse(message="Group posts retrieved successfully", data=posts)


@router.put("/{post_id}", response_model=ApiResponse[PostOut])
async def update_post(post_id: int, data: PostUpdate, session: SessionDep, current_user: CurrentUser):
    post = await services.update_post(session, post_id, current_user.id, data)
    return ApiResponse(message="Post was updated", data=post)


@router.delete("/{post_id}", response_model=ApiResponse[None])
async def delete_post(post_id: int, session: SessionDep, current_user: CurrentUser):
    await services.delete_post(session, post_id, current_user.id)
    return ApiResponse(message="Post was deleted")


@router.post("/{post_id}/like", response_model=ApiResponse[CountOut])
async def like_post(post_id: int, session: SessionDep, current_user: CurrentUser):
    count = await services.like_post(session, post_id, current_user.id)
    return ApiResponse(message="Like toggled", data=CountOut(post_id=post_id, count=count))


@router.post("/{post_id}/repost", response_model=ApiResponse[CountOut])
async def repost(post_id: int, session: SessionDep, current_user: CurrentUser):
    count = await services.repost(session, post_id, current_user.id)
    return ApiResponse(message="Post was reposted", data=CountOut(post_id=post_id, count=count))
