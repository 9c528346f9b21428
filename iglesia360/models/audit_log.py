from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditLog:
    id: int
    solicitud_id: int
    action: str
    created_at: datetime
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    old_value: Optional[dict] = None
    new_value: Optional[dict] = None
    changed_fields: Optional[list[str]] = None
    comment: Optional[str] = None
