"""
Approvals API routes: approve or reject a solicitud as the acting
approver, list a solicitud's approval chain.
"""

from typing import List

from fastapi import APIRouter, Depends

from iglesia360.database import Store, get_store
from iglesia360.middleware.auth import get_approver_id
from iglesia360.models import ApprovalInfo
from iglesia360.schemas.approval import ApprovalInfoResponse, ApproveRequest, RejectRequest
from iglesia360.schemas.common import ApiResponse
from iglesia360.services import approval_service

router = APIRouter()


def _to_response(a: ApprovalInfo) -> ApprovalInfoResponse:
    return ApprovalInfoResponse.model_validate(a)


@router.post(
    "/{solicitud_id}/approve",
    response_model=ApiResponse[ApprovalInfoResponse],
    response_model_exclude_none=True,
)
async def approve_solicitud(
    solicitud_id: int,
    body: ApproveRequest = ApproveRequest(),
    approver_id: int = Depends(get_approver_id),
    store: Store = Depends(get_store),
):
    entry = approval_service.approve_solicitud(
        store, solicitud_id, approver_id, comments=body.comments
    )
    return ApiResponse(data=_to_response(entry), message="Solicitud approved successfully")


@router.post(
    "/{solicitud_id}/reject",
    response_model=ApiResponse[ApprovalInfoResponse],
    response_model_exclude_none=True,
)
async def reject_solicitud(
    solicitud_id: int,
    body: RejectRequest = RejectRequest(),
    approver_id: int = Depends(get_approver_id),
    store: Store = Depends(get_store),
):
    entry = approval_service.reject_solicitud(
        store,
        solicitud_id,
        approver_id,
        rejection_reason=body.rejection_reason,
        comments=body.comments,
    )
    return ApiResponse(data=_to_response(entry), message="Solicitud rejected successfully")


@router.get(
    "/{solicitud_id}/approvals",
    response_model=ApiResponse[List[ApprovalInfoResponse]],
    response_model_exclude_none=True,
)
async def list_approvals(solicitud_id: int, store: Store = Depends(get_store)):
    approvals = approval_service.list_approvals(store, solicitud_id)
    return ApiResponse(data=[_to_response(a) for a in approvals])
