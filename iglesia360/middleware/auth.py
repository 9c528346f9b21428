"""
Acting-user resolution.

There is no real authentication: the caller names itself with the
``X-User-Id`` header. Without it, requester endpoints act as
MOCK_REQUESTER_ID and approver endpoints as MOCK_APPROVER_ID.
"""

from typing import Optional

from fastapi import Header
import structlog

from iglesia360.config import settings


def _resolve(header_value: Optional[int], fallback: int) -> int:
    actor = header_value if header_value is not None else fallback
    structlog.contextvars.bind_contextvars(actor_id=actor)
    return actor


async def get_requester_id(x_user_id: Optional[int] = Header(None)) -> int:
    """FastAPI dependency: acting requester."""
    return _resolve(x_user_id, settings.MOCK_REQUESTER_ID)


async def get_approver_id(x_user_id: Optional[int] = Header(None)) -> int:
    """FastAPI dependency: acting approver."""
    return _resolve(x_user_id, settings.MOCK_APPROVER_ID)
