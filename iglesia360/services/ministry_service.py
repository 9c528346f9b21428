from typing import Optional

from iglesia360.exceptions import NotFoundError
from iglesia360.models import Ministry
from iglesia360.schemas.common import paginate


def list_ministries(
    store, page: int = 1, page_size: int = 10, status: Optional[str] = None
) -> tuple[list[Ministry], int]:
    rows = store.ministries.list(lambda m: status is None or m.status == status)
    return paginate(rows, page, page_size), len(rows)


def get_ministry(store, ministry_id: int) -> Ministry:
    ministry = store.ministries.get(ministry_id)
    if ministry is None:
        raise NotFoundError("Ministry not found")
    return ministry
