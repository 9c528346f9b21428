from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ApprovalStatus(str, Enum):
    PENDIENTE = "pendiente"
    APROBADO = "aprobado"
    RECHAZADO = "rechazado"


@dataclass
class ApprovalInfo:
    id: int
    solicitud_id: int
    approver_user_id: int
    approval_order: int
    status: ApprovalStatus
    required_approval: bool
    created_at: datetime
    updated_at: datetime
    approver_name: Optional[str] = None
    approval_date: Optional[datetime] = None
    comments: Optional[str] = None
    rejection_reason: Optional[str] = None
