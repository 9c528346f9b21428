import math
from typing import Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (both accepted on input)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None


class PaginatedResponse(CamelModel, Generic[T]):
    success: bool = True
    data: List[T] = Field(default_factory=list)
    total: int
    page: int
    page_size: int
    total_pages: int


def clamp_page(page: int, page_size: int) -> tuple[int, int]:
    return max(1, page), max(1, page_size)


def paginate(rows: Sequence[T], page: int, page_size: int) -> list[T]:
    """1-based offset/limit slice; a page past the end is just empty."""
    page, page_size = clamp_page(page, page_size)
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])


def build_pagination(page: int, page_size: int, total: int) -> dict:
    page, page_size = clamp_page(page, page_size)
    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }
