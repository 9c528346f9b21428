from datetime import datetime
from typing import Optional

from iglesia360.models import ApprovalStatus
from iglesia360.schemas.common import CamelModel


class ApprovalInfoResponse(CamelModel):
    id: int
    solicitud_id: int
    approver_user_id: int
    approver_name: Optional[str] = None
    approval_order: int
    status: ApprovalStatus
    required_approval: bool
    approval_date: Optional[datetime] = None
    comments: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ApproveRequest(CamelModel):
    comments: Optional[str] = None


class RejectRequest(CamelModel):
    # Required, but checked by the validation layer so the error is a plain 400
    rejection_reason: Optional[str] = None
    comments: Optional[str] = None
