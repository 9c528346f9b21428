from typing import List

from fastapi import APIRouter, Depends

from iglesia360.database import Store, get_store
from iglesia360.schemas.audit_log import AuditLogResponse
from iglesia360.schemas.common import ApiResponse
from iglesia360.services.audit_service import list_audit_logs

router = APIRouter()


@router.get(
    "/{solicitud_id}/audit-logs",
    response_model=ApiResponse[List[AuditLogResponse]],
    response_model_exclude_none=True,
)
async def solicitud_audit_logs(solicitud_id: int, store: Store = Depends(get_store)):
    logs = list_audit_logs(store, solicitud_id)
    return ApiResponse(data=[AuditLogResponse.model_validate(log) for log in logs])
