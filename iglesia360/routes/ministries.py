from typing import Optional

from fastapi import APIRouter, Depends, Query

from iglesia360.config import settings
from iglesia360.database import Store, get_store
from iglesia360.models import Ministry
from iglesia360.schemas.common import ApiResponse, PaginatedResponse, build_pagination
from iglesia360.schemas.ministry import MinistryResponse
from iglesia360.services.ministry_service import get_ministry, list_ministries

router = APIRouter()


def _to_response(m: Ministry) -> MinistryResponse:
    return MinistryResponse.model_validate(m)


@router.get(
    "",
    response_model=PaginatedResponse[MinistryResponse],
    response_model_exclude_none=True,
)
async def list_ministries_route(
    page: int = Query(1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize"),
    status_filter: Optional[str] = Query(None, alias="status"),
    store: Store = Depends(get_store),
):
    rows, total = list_ministries(store, page=page, page_size=page_size, status=status_filter)
    return PaginatedResponse(
        data=[_to_response(m) for m in rows],
        **build_pagination(page, page_size, total),
    )


@router.get(
    "/{ministry_id}",
    response_model=ApiResponse[MinistryResponse],
    response_model_exclude_none=True,
)
async def get_ministry_route(ministry_id: int, store: Store = Depends(get_store)):
    return ApiResponse(data=_to_response(get_ministry(store, ministry_id)))
