"""Central model registry."""

from iglesia360.models.approval import ApprovalInfo, ApprovalStatus  # noqa: F401
from iglesia360.models.audit_log import AuditLog  # noqa: F401
from iglesia360.models.ministry import Ministry  # noqa: F401
from iglesia360.models.solicitud import (  # noqa: F401
    Attachment,
    DocumentType,
    PaymentType,
    Solicitud,
    SolicitudItem,
    SolicitudStatus,
)
from iglesia360.models.user import User, UserRole, UserStatus  # noqa: F401
