from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr

from iglesia360.models import UserRole, UserStatus
from iglesia360.schemas.common import CamelModel


class LoginRequest(CamelModel):
    # Presence is checked by the service so a missing field is a plain 400
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(CamelModel):
    id: int
    email: str
    name: str
    roles: List[UserRole]
    permissions: List[str] = []


class UserResponse(CamelModel):
    id: int
    email: str
    name: str
    phone: Optional[str] = None
    status: UserStatus
    roles: List[UserRole]
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserCreateRequest(CamelModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    roles: Optional[List[UserRole]] = None


class UserUpdateRequest(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[UserStatus] = None
    roles: Optional[List[UserRole]] = None


class RoleResponse(CamelModel):
    role: UserRole
    permissions: List[str]
