from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from iglesia360.config import settings
from iglesia360.database import Store, get_store
from iglesia360.models import User, UserRole, UserStatus
from iglesia360.schemas.auth import UserCreateRequest, UserResponse, UserUpdateRequest
from iglesia360.schemas.common import ApiResponse, PaginatedResponse, build_pagination
from iglesia360.services import user_service

router = APIRouter()


def _to_response(u: User) -> UserResponse:
    return UserResponse.model_validate(u)


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    response_model_exclude_none=True,
)
async def list_users(
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    status_filter: Optional[UserStatus] = Query(None, alias="status"),
    role: Optional[UserRole] = Query(None),
    store: Store = Depends(get_store),
):
    rows, total = user_service.list_users(
        store, page=page, page_size=page_size, status=status_filter, role=role
    )
    return PaginatedResponse(
        data=[_to_response(u) for u in rows],
        **build_pagination(page, page_size, total),
    )


@router.get("/{user_id}", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def get_user(user_id: int, store: Store = Depends(get_store)):
    return ApiResponse(data=_to_response(user_service.get_user(store, user_id)))


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(body: UserCreateRequest, store: Store = Depends(get_store)):
    user = user_service.create_user(
        store, email=body.email, name=body.name, phone=body.phone, roles=body.roles
    )
    return ApiResponse(data=_to_response(user), message="User created successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def update_user(user_id: int, body: UserUpdateRequest, store: Store = Depends(get_store)):
    user = user_service.update_user(
        store,
        user_id,
        name=body.name,
        phone=body.phone,
        status=body.status,
        roles=body.roles,
    )
    return ApiResponse(data=_to_response(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
async def delete_user(user_id: int, store: Store = Depends(get_store)):
    user_service.delete_user(store, user_id)
    return ApiResponse(message="User deleted successfully")
