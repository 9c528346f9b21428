"""Users, mock login and the role -> permission catalogue."""

from datetime import datetime, timezone
from typing import Optional

import structlog

from iglesia360.config import settings
from iglesia360.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from iglesia360.models import User, UserRole, UserStatus
from iglesia360.schemas.common import paginate
from iglesia360.services.validation import is_blank, missing_fields

logger = structlog.get_logger()

ROLE_PERMISSIONS: dict[UserRole, list[str]] = {
    UserRole.ADMIN: [
        "users.create",
        "users.view",
        "users.edit",
        "users.delete",
        "users.manage_roles",
        "permissions.manage",
        "solicitudes.view_all",
        "solicitudes.approve",
        "solicitudes.force_approval",
    ],
    UserRole.TESORERO: [
        "solicitudes.view_all",
        "solicitudes.approve",
        "solicitudes.mark_paid",
    ],
    UserRole.PASTOR_GENERAL: [
        "solicitudes.view_all",
        "solicitudes.approve",
        "solicitudes.force_approval",
    ],
    UserRole.PASTOR_RED: ["solicitudes.view", "solicitudes.approve"],
    UserRole.USUARIO: ["solicitudes.create", "solicitudes.view", "solicitudes.edit"],
}


def permissions_for(roles: list[UserRole]) -> list[str]:
    granted: list[str] = []
    for role in roles:
        for permission in ROLE_PERMISSIONS.get(role, []):
            if permission not in granted:
                granted.append(permission)
    return granted


def _find_by_email(store, email: str) -> Optional[User]:
    wanted = email.strip().lower()
    matches = store.users.list(lambda u: u.email.lower() == wanted)
    return matches[0] if matches else None


def get_user(store, user_id: int) -> User:
    user = store.users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(
    store,
    page: int = 1,
    page_size: int = 10,
    status: Optional[UserStatus] = None,
    role: Optional[UserRole] = None,
) -> tuple[list[User], int]:
    rows = store.users.list(
        lambda u: (status is None or u.status == status)
        and (role is None or role in u.roles)
    )
    return paginate(rows, page, page_size), len(rows)


def create_user(
    store,
    email: Optional[str],
    name: Optional[str],
    phone: Optional[str] = None,
    roles: Optional[list[UserRole]] = None,
) -> User:
    if missing_fields(email=email, name=name):
        raise ValidationError("Email and name are required")

    with store.lock:
        if _find_by_email(store, email):
            raise ConflictError("Email already exists")
        now = datetime.now(timezone.utc)
        user = User(
            id=store.users.next_id(),
            email=email.strip(),
            name=name.strip(),
            phone=phone,
            status=UserStatus.ACTIVE,
            roles=list(roles) if roles else [UserRole.USUARIO],
            created_at=now,
            updated_at=now,
        )
        store.users.insert(user)

    logger.info("user_created", user_id=user.id, roles=[r.value for r in user.roles])
    return user


def update_user(
    store,
    user_id: int,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    status: Optional[UserStatus] = None,
    roles: Optional[list[UserRole]] = None,
) -> User:
    with store.lock:
        user = get_user(store, user_id)
        if name is not None:
            if is_blank(name):
                raise ValidationError("Name cannot be empty")
            user.name = name.strip()
        if phone is not None:
            user.phone = phone
        if status is not None:
            user.status = status
        if roles is not None:
            user.roles = list(roles)
        user.updated_at = datetime.now(timezone.utc)
        store.users.replace(user)

    logger.info("user_updated", user_id=user_id)
    return user


def delete_user(store, user_id: int) -> None:
    with store.lock:
        if not store.users.delete(user_id):
            raise NotFoundError("User not found")
    logger.info("user_deleted", user_id=user_id)


def authenticate(store, email: Optional[str], password: Optional[str]) -> User:
    """Mock credential check: any active user with the shared demo password."""
    if missing_fields(email=email, password=password):
        raise ValidationError("Email and password are required")

    with store.lock:
        user = _find_by_email(store, email)
        if user is None or not user.is_active or password != settings.DEMO_PASSWORD:
            logger.warning("login_failed", email=email)
            raise AuthenticationError("Invalid email or password")
        user.last_login = datetime.now(timezone.utc)
        store.users.replace(user)

    logger.info("login_succeeded", user_id=user.id)
    return user
