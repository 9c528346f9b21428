from datetime import datetime
from typing import List, Optional

from iglesia360.models import DocumentType, PaymentType, SolicitudStatus
from iglesia360.schemas.approval import ApprovalInfoResponse
from iglesia360.schemas.common import CamelModel

# Request fields are typed but optional: required-ness is decided by
# iglesia360.services.validation so every omission yields the same 400.


class SolicitudItemInput(CamelModel):
    description: Optional[str] = None
    amount: Optional[float] = None
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    # Ignored; items are always renumbered
    item_number: Optional[int] = None


class ThirdPartyAccount(CamelModel):
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    document_type: Optional[str] = None
    document: Optional[str] = None
    cci: Optional[str] = None


class CreateSolicitudRequest(CamelModel):
    ministry_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    responsible_user_id: Optional[int] = None
    payment_type: Optional[PaymentType] = None
    payment_detail: Optional[str] = None
    third_party_account: Optional[ThirdPartyAccount] = None
    items: Optional[List[SolicitudItemInput]] = None
    currency: Optional[str] = None


class UpdateSolicitudRequest(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    responsible_user_id: Optional[int] = None
    payment_type: Optional[PaymentType] = None
    payment_detail: Optional[str] = None
    third_party_account: Optional[ThirdPartyAccount] = None
    items: Optional[List[SolicitudItemInput]] = None


class SubmitSolicitudRequest(CamelModel):
    comments: Optional[str] = None


class SolicitudItemResponse(CamelModel):
    item_number: int
    description: str
    amount: float
    quantity: Optional[float] = None
    unit_price: Optional[float] = None


class AttachmentResponse(CamelModel):
    id: int
    file_name: str
    file_type: Optional[str] = None
    file_size: int
    file_path: str
    uploaded_by: int
    uploaded_by_name: Optional[str] = None
    document_type: DocumentType
    uploaded_at: datetime


class SolicitudResponse(CamelModel):
    id: int
    code: str
    ministry_id: int
    ministry_name: Optional[str] = None
    requester_user_id: int
    requester_name: Optional[str] = None
    responsible_user_id: int
    responsible_name: Optional[str] = None
    title: str
    description: str
    total_amount: float
    currency: str
    status: SolicitudStatus
    payment_type: PaymentType
    payment_detail: Optional[str] = None
    requester_comments: Optional[str] = None
    rejection_reason: Optional[str] = None
    items: List[SolicitudItemResponse] = []
    attachments: List[AttachmentResponse] = []
    approvals: List[ApprovalInfoResponse] = []
    created_at: datetime
    updated_at: datetime
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class DashboardStatsResponse(CamelModel):
    total_solicitudes: int
    pending_solicitudes: int
    approved_solicitudes: int
    total_amount: float
    approved_amount: float
    ministries: int
    users: int
