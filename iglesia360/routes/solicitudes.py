"""
Solicitudes API routes: list, read, create, update draft, submit,
dashboard statistics.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from iglesia360.config import settings
from iglesia360.database import Store, get_store
from iglesia360.middleware.auth import get_requester_id
from iglesia360.models import Solicitud, SolicitudStatus
from iglesia360.schemas.common import ApiResponse, PaginatedResponse, build_pagination
from iglesia360.schemas.solicitud import (
    CreateSolicitudRequest,
    DashboardStatsResponse,
    SolicitudResponse,
    SubmitSolicitudRequest,
    UpdateSolicitudRequest,
)
from iglesia360.services import solicitud_service
from iglesia360.services.validation import format_third_party_account

router = APIRouter()


def _to_response(s: Solicitud) -> SolicitudResponse:
    return SolicitudResponse.model_validate(s)


def _payment_detail(body) -> Optional[str]:
    """A structured third-party account wins over free-text paymentDetail."""
    if body.third_party_account is not None:
        return format_third_party_account(body.third_party_account)
    return body.payment_detail


# Registered before "/{solicitud_id}" so "dashboard" is never parsed as an id
@router.get(
    "/dashboard/stats",
    response_model=ApiResponse[DashboardStatsResponse],
    response_model_exclude_none=True,
)
async def dashboard_stats(store: Store = Depends(get_store)):
    stats = solicitud_service.get_dashboard_stats(store)
    return ApiResponse(data=DashboardStatsResponse(**stats))


@router.get(
    "",
    response_model=PaginatedResponse[SolicitudResponse],
    response_model_exclude_none=True,
)
async def list_solicitudes(
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    status_filter: Optional[SolicitudStatus] = Query(None, alias="status"),
    ministry_id: Optional[int] = Query(None, alias="ministryId"),
    requester_user_id: Optional[int] = Query(None, alias="requesterUserId"),
    store: Store = Depends(get_store),
):
    rows, total = solicitud_service.list_solicitudes(
        store,
        page=page,
        page_size=page_size,
        status=status_filter,
        ministry_id=ministry_id,
        requester_user_id=requester_user_id,
    )
    return PaginatedResponse(
        data=[_to_response(s) for s in rows],
        **build_pagination(page, page_size, total),
    )


@router.get(
    "/{solicitud_id}",
    response_model=ApiResponse[SolicitudResponse],
    response_model_exclude_none=True,
)
async def get_solicitud(solicitud_id: int, store: Store = Depends(get_store)):
    return ApiResponse(data=_to_response(solicitud_service.get_solicitud(store, solicitud_id)))


@router.post(
    "",
    response_model=ApiResponse[SolicitudResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_solicitud(
    body: CreateSolicitudRequest,
    requester_id: int = Depends(get_requester_id),
    store: Store = Depends(get_store),
):
    solicitud = solicitud_service.create_solicitud(
        store,
        requester_id,
        ministry_id=body.ministry_id,
        responsible_user_id=body.responsible_user_id,
        title=body.title,
        description=body.description,
        items=body.items,
        payment_type=body.payment_type,
        payment_detail=_payment_detail(body),
        currency=body.currency,
    )
    return ApiResponse(data=_to_response(solicitud), message="Solicitud created successfully")


@router.put(
    "/{solicitud_id}",
    response_model=ApiResponse[SolicitudResponse],
    response_model_exclude_none=True,
)
async def update_solicitud(
    solicitud_id: int,
    body: UpdateSolicitudRequest,
    requester_id: int = Depends(get_requester_id),
    store: Store = Depends(get_store),
):
    patch = body.model_dump(exclude_unset=True, exclude={"items", "third_party_account"})
    if body.items is not None:
        patch["items"] = body.items
    if body.third_party_account is not None:
        patch["payment_detail"] = _payment_detail(body)

    solicitud = solicitud_service.update_solicitud(
        store, solicitud_id, patch, user_id=requester_id
    )
    return ApiResponse(data=_to_response(solicitud), message="Solicitud updated successfully")


@router.post(
    "/{solicitud_id}/submit",
    response_model=ApiResponse[SolicitudResponse],
    response_model_exclude_none=True,
)
async def submit_solicitud(
    solicitud_id: int,
    body: SubmitSolicitudRequest = SubmitSolicitudRequest(),
    requester_id: int = Depends(get_requester_id),
    store: Store = Depends(get_store),
):
    solicitud = solicitud_service.submit_solicitud(
        store, solicitud_id, user_id=requester_id, comments=body.comments
    )
    return ApiResponse(data=_to_response(solicitud), message="Solicitud submitted successfully")
