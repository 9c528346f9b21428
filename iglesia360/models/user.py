from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    ADMIN = "admin"
    TESORERO = "tesorero"
    PASTOR_GENERAL = "pastor_general"
    PASTOR_RED = "pastor_red"
    USUARIO = "usuario"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


@dataclass
class User:
    id: int
    email: str
    name: str
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    roles: list[UserRole] = field(default_factory=list)
    phone: Optional[str] = None
    last_login: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
