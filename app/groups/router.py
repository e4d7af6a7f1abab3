from fastapi import APIRouter, Query, status

from app.auth.dependencies import CurrentUser
from app.database import SessionDep
from app.groups import services
from app.groups.schemas import GroupCreate, GroupMemberRequest, GroupOut, GroupUpdate
from app.responses import ApiResponse, Page
from app.users.schemas import UserShort
from app.users.services import to_short

router = APIRouter(prefix="/api/groups", tags=["Groups"])


@router.post("/", response_model=ApiResponse[GroupOut], status_code=status.HTTP_201_CREATED)
async def create_group(data: GroupCreate, session: SessionDep, current_user: CurrentUser):
    group = await services.create(session, current_user.id, data)
    return ApiResponse(message="Group was created", data=group)


@router.get("/", response_model=ApiResponse[Page[GroupOut]])
async def get_all_groups(
    session: SessionDep,
    current_user: CurrentUser,
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
):
    groups = await services.get_all(session, page, size, current_user.id)
    return ApiResponse(message="Groups retrieved successfully", data=groups)


@router.get("/{group_id}", response_model=ApiResponse[GroupOut])
async def get_group(group_id: int, session: SessionDep, current_user: CurrentUser):
    group = await services.get_group(session, group_id, current_user.id)
    return ApiResponse(message="Group retrieved successfully", data=group)


@router.put("/{group_id}", response_model=ApiResponse[GroupOut])
async def update_group(group_id: int, data: GroupUpdate, session: SessionDep, current_user: CurrentUser):
    group = await services.update(session, group_id, data, current_user.id)
    return ApiResponse(message="Group was updated", data=group)


@router.delete("/{group_id}", response_model=ApiResponse[None])
async def delete_group(group_id: int, session: SessionDep, current_user: CurrentUser):
    await services.delete(session, group_id, current_user.id)
    return ApiResponse(message="Group was deleted")


@router.post("/{group_id}/join", response_model=ApiResponse[None])
async def join_group(group_id: int, session: SessionDep, current_user: CurrentUser):
    user_id = current_user.id
    joined = await services.add_user_to_group(session, group_id, user_id, user_id)
    if joined:
        message = f"User with Id {user_id} was added to the group {group_id}"
    else:
        message = f"Request for adding to the group {group_id} was sent from user with Id {user_id}"
    return ApiResponse(message=message)


@router.post("/{group_id}/members", response_model=ApiResponse[None])
async def invite_to_group(group_id: int, data: GroupMemberRequest, session: SessionDep, current_user: CurrentUser):
    joined = await services.add_user_to_group(session, group_id, data.user_id, current_user.id)
    if joined:
        message = f"User with Id {data.user_id} was added to the group {group_id}"
    else:
        message = f"Request for adding to the group {group_id} was sent for user with Id {data.user_id}"
    return ApiResponse(message=message)


@router.put("/{group_id}/members", response_model=ApiResponse[None])
async def respond_to_request(group_id: int, data: GroupMemberRequest, session: SessionDep, current_user: CurrentUser):
    approved = await services.respond_to_adding_request(
        session, group_id, data.user_id, data.status, responder_id=current_user.id
    )
    if approved:
        message = f"User with Id {data.user_id} was added to the group {group_id}"
    else:
        message = f"User with Id {data.user_id} was rejected to join to the group {group_id}"
    return ApiResponse(message=message)


@router.get("/{group_id}/members", response_model=ApiResponse[list[UserShort]])
async def get_group_members(group_id: int, session: SessionDep, current_user: CurrentUser):
    members = await services.get_group_members(session, group_id)
    return ApiResponse(message="Group members retrieved successfully", data=to_short(members))


@router.get("/{group_id}/requests", response_model=ApiResponse[list[UserShort]])
async def get_group_requests(group_id: int, session: SessionDep, current_user: CurrentUser):
    users = await services.get_group_requests(session, group_id)
    return ApiResponse(message="Group requests retrieved successfully", data=to_short(users))
