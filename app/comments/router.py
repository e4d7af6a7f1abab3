from fastapi import APIRouter, status

from app.auth.dependencies import CurrentUser
from app.comments import services
from app.comments.schemas import CommentOut, CommentRequest
from app.database import SessionDep
from app.responses import ApiResponse

router = APIRouter(prefix="/api/comments", tags=["Comments"])


@router.post("/post/{post_id}", response_model=ApiResponse[CommentOut], status_code=status.HTTP_201_CREATED)
async def add_comment(post_id: int, data: CommentRequest, session: SessionDep, current_user: CurrentUser):
    comment = await services.add_comment(session, post_id, current_user.id, data.text)
    return ApiResponse(message="Comment added successfully", data=comment)


@router.get("/post/{post_id}", response_model=ApiResponse[list[CommentOut]])
async def get_post_comments(post_id: int, session: SessionDep, current_user: CurrentUser):
    comments = await services.get_post_comments(session, post_id)
    return ApiResponse(message="Comments retrieved successfully", data=comments)


@router.put("/{comment_id}", response_model=ApiResponse[None])
async def update_comment(comment_id: int, data: CommentRequest, session: SessionDep, current_user: CurrentUser):
    await services.update_comment(session, comment_id, current_user.id, data.text)
    return ApiResponse(message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(comment_id: int, session: SessionDep, current_user: CurrentUser):
    await services.delete_comment(session, comment_id, current_user.id)
    return ApiResponse(message="Comment deleted successfully")
