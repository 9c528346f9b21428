from datetime import datetime
from typing import Optional

from iglesia360.schemas.common import CamelModel


class MinistryResponse(CamelModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    responsible_user_id: int
    budget_limit: float
    currency: str
    status: str
    created_at: datetime
    updated_at: datetime
