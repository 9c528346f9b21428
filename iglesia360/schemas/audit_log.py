from datetime import datetime
from typing import List, Optional

from iglesia360.schemas.common import CamelModel


class AuditLogResponse(CamelModel):
    id: int
    solicitud_id: int
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    action: str
    old_value: Optional[dict] = None
    new_value: Optional[dict] = None
    changed_fields: Optional[List[str]] = None
    comment: Optional[str] = None
    created_at: datetime
