from typing import List

from fastapi import APIRouter, Depends

from iglesia360.database import Store, get_store
from iglesia360.schemas.auth import LoginRequest, LoginResponse, RoleResponse
from iglesia360.schemas.common import ApiResponse
from iglesia360.services.user_service import ROLE_PERMISSIONS, authenticate, permissions_for

router = APIRouter()
roles_router = APIRouter()


@router.post("/login", response_model=ApiResponse[LoginResponse], response_model_exclude_none=True)
async def login(body: LoginRequest, store: Store = Depends(get_store)):
    """Mock login: checks the shared demo password, issues no token."""
    user = authenticate(store, body.email, body.password)
    return ApiResponse(
        data=LoginResponse(
            id=user.id,
            email=user.email,
            name=user.name,
            roles=user.roles,
            permissions=permissions_for(user.roles),
        )
    )


@roles_router.get("", response_model=ApiResponse[List[RoleResponse]], response_model_exclude_none=True)
async def list_roles():
    return ApiResponse(
        data=[
            RoleResponse(role=role, permissions=permissions)
            for role, permissions in ROLE_PERMISSIONS.items()
        ]
    )
