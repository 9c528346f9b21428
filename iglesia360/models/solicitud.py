from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from iglesia360.models.approval import ApprovalInfo


class SolicitudStatus(str, Enum):
    BORRADOR = "borrador"
    PENDIENTE = "pendiente"
    EN_REVISION = "en_revision"
    APROBADO_PARCIAL = "aprobado_parcial"
    APROBADO = "aprobado"
    RECHAZADO = "rechazado"
    COMPLETADO = "completado"
    CANCELADO = "cancelado"


class PaymentType(str, Enum):
    UNO_MISMO = "uno_mismo"
    TERCEROS = "terceros"


class DocumentType(str, Enum):
    COMPROBANTE = "comprobante"
    PRESUPUESTO = "presupuesto"
    OTRO = "otro"


@dataclass
class SolicitudItem:
    item_number: int
    description: str
    amount: float
    quantity: Optional[float] = None
    unit_price: Optional[float] = None


@dataclass
class Attachment:
    id: int
    file_name: str
    file_size: int
    file_path: str
    uploaded_by: int
    document_type: DocumentType
    uploaded_at: datetime
    file_type: Optional[str] = None
    uploaded_by_name: Optional[str] = None


@dataclass
class Solicitud:
    id: int
    code: str
    ministry_id: int
    requester_user_id: int
    responsible_user_id: int
    title: str
    description: str
    total_amount: float
    currency: str
    status: SolicitudStatus
    payment_type: PaymentType
    created_at: datetime
    updated_at: datetime
    items: list[SolicitudItem] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    approvals: list[ApprovalInfo] = field(default_factory=list)
    payment_detail: Optional[str] = None
    requester_comments: Optional[str] = None
    rejection_reason: Optional[str] = None
    ministry_name: Optional[str] = None
    requester_name: Optional[str] = None
    responsible_name: Optional[str] = None
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
