from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Ministry:
    id: int
    code: str
    name: str
    responsible_user_id: int
    budget_limit: float
    currency: str
    status: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
