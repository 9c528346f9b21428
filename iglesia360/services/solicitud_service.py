"""
Solicitud lifecycle operations: create, update, submit, read, list, stats.

Mutations hold ``store.lock`` for their whole duration and follow the same
shape: load, build a modified copy, validate the copy, then ``replace``.
Anything raised before ``replace`` leaves the stored solicitud untouched.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import structlog

from iglesia360.config import settings
from iglesia360.exceptions import NotFoundError, ValidationError
from iglesia360.models import (
    PaymentType,
    Solicitud,
    SolicitudItem,
    SolicitudStatus,
)
from iglesia360.schemas.common import paginate
from iglesia360.services.approval_service import create_approval_workflow
from iglesia360.services.audit_service import create_audit_log, snapshot
from iglesia360.services.status_rules import ensure_editable, ensure_transition
from iglesia360.services.validation import (
    check_items,
    check_payment_detail,
    check_required_fields,
    check_solicitud,
    is_blank,
    item_amount,
)

logger = structlog.get_logger()

UPDATABLE_FIELDS = (
    "title",
    "description",
    "responsible_user_id",
    "payment_type",
    "payment_detail",
    "items",
)

PENDING_STATES = (SolicitudStatus.PENDIENTE, SolicitudStatus.EN_REVISION)
APPROVED_STATES = (SolicitudStatus.APROBADO, SolicitudStatus.COMPLETADO)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def build_items(items: Iterable[Any]) -> list[SolicitudItem]:
    """Normalize incoming items: resolve amounts and renumber 1..N."""
    return [
        SolicitudItem(
            item_number=number,
            description=(item.description or "").strip(),
            amount=item_amount(item.amount, item.quantity, item.unit_price),
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for number, item in enumerate(items or [], start=1)
    ]


def total_of(items: list[SolicitudItem]) -> float:
    return round(sum(item.amount for item in items), 2)


def _resolve_names(store, solicitud: Solicitud) -> None:
    ministry = store.ministries.get(solicitud.ministry_id)
    requester = store.users.get(solicitud.requester_user_id)
    responsible = store.users.get(solicitud.responsible_user_id)
    solicitud.ministry_name = ministry.name if ministry else None
    solicitud.requester_name = requester.name if requester else None
    solicitud.responsible_name = responsible.name if responsible else None


def get_solicitud(store, solicitud_id: int) -> Solicitud:
    solicitud = store.solicitudes.get(solicitud_id)
    if solicitud is None:
        raise NotFoundError("Solicitud not found")
    return solicitud


def create_solicitud(
    store,
    requester_id: int,
    *,
    ministry_id: Optional[int],
    responsible_user_id: Optional[int],
    title: Optional[str],
    description: Optional[str],
    items: Optional[list],
    payment_type: Optional[PaymentType] = None,
    payment_detail: Optional[str] = None,
    currency: Optional[str] = None,
) -> Solicitud:
    check_required_fields(
        title=title,
        description=description,
        ministryId=ministry_id,
        responsibleUserId=responsible_user_id,
        items=items,
    )
    built_items = build_items(items)
    check_items(built_items)
    payment_type = payment_type or PaymentType.UNO_MISMO
    payment_detail = _clean(payment_detail)
    check_payment_detail(payment_type, payment_detail)

    with store.lock:
        now = _now()
        new_id = store.solicitudes.next_id()
        solicitud = Solicitud(
            id=new_id,
            code=f"SOL{new_id:03d}",
            ministry_id=ministry_id,
            requester_user_id=requester_id,
            responsible_user_id=responsible_user_id,
            title=title.strip(),
            description=description.strip(),
            total_amount=total_of(built_items),
            currency=(_clean(currency) or settings.DEFAULT_CURRENCY).upper(),
            status=SolicitudStatus.BORRADOR,
            payment_type=payment_type,
            payment_detail=payment_detail,
            items=built_items,
            created_at=now,
            updated_at=now,
        )
        _resolve_names(store, solicitud)
        store.solicitudes.insert(solicitud)
        create_audit_log(
            store, new_id, "created", user_id=requester_id, new_value=snapshot(solicitud)
        )

    logger.info(
        "solicitud_created",
        solicitud_id=solicitud.id,
        code=solicitud.code,
        total_amount=solicitud.total_amount,
        requester_id=requester_id,
    )
    return solicitud


def _apply_patch(solicitud: Solicitud, patch: dict) -> None:
    for name in UPDATABLE_FIELDS:
        value = patch.get(name)
        if value is None:
            continue
        if name in ("title", "description"):
            if is_blank(value):
                raise ValidationError(f"Missing required fields: {name}")
            setattr(solicitud, name, value.strip())
        elif name == "responsible_user_id":
            if is_blank(value):
                raise ValidationError("Missing required fields: responsibleUserId")
            solicitud.responsible_user_id = value
        elif name == "payment_type":
            solicitud.payment_type = PaymentType(value)
        elif name == "payment_detail":
            solicitud.payment_detail = _clean(value)
        elif name == "items":
            solicitud.items = build_items(value)
            check_items(solicitud.items)
            solicitud.total_amount = total_of(solicitud.items)


def update_solicitud(
    store, solicitud_id: int, patch: dict, user_id: Optional[int] = None
) -> Solicitud:
    """
    Apply a partial update to a draft.

    ``patch`` maps snake_case field names to new values; keys outside
    UPDATABLE_FIELDS and ``None`` values are ignored.
    """
    with store.lock:
        current = get_solicitud(store, solicitud_id)
        ensure_editable(current.status)

        updated = copy.deepcopy(current)
        _apply_patch(updated, patch)
        check_solicitud(updated)
        updated.updated_at = _now()
        _resolve_names(store, updated)

        store.solicitudes.replace(updated)
        create_audit_log(
            store,
            solicitud_id,
            "updated",
            user_id=user_id,
            old_value=snapshot(current),
            new_value=snapshot(updated),
        )

    logger.info(
        "solicitud_updated",
        solicitud_id=solicitud_id,
        fields=sorted(k for k, v in patch.items() if k in UPDATABLE_FIELDS and v is not None),
    )
    return updated


def submit_solicitud(
    store,
    solicitud_id: int,
    user_id: Optional[int] = None,
    comments: Optional[str] = None,
) -> Solicitud:
    with store.lock:
        current = get_solicitud(store, solicitud_id)
        ensure_transition(
            current.status,
            SolicitudStatus.PENDIENTE,
            "Can only submit draft solicitudes",
        )
        # Stored drafts are re-validated before leaving borrador
        check_solicitud(current)

        now = _now()
        submitted = copy.deepcopy(current)
        submitted.status = SolicitudStatus.PENDIENTE
        submitted.submitted_at = submitted.submitted_at or now
        submitted.updated_at = now
        if _clean(comments):
            submitted.requester_comments = _clean(comments)
        chain = create_approval_workflow(store, submitted, now)
        # Decisions recorded on the draft are kept, renumbered after the chain
        next_order = max(a.approval_order for a in chain) + 1
        earlier = sorted(submitted.approvals, key=lambda a: (a.approval_order, a.id))
        for offset, entry in enumerate(earlier):
            entry.approval_order = next_order + offset
        submitted.approvals = chain + earlier

        store.solicitudes.replace(submitted)
        create_audit_log(
            store,
            solicitud_id,
            "submitted",
            user_id=user_id,
            old_value=snapshot(current),
            new_value=snapshot(submitted),
            comment=submitted.requester_comments,
        )

    logger.info(
        "solicitud_submitted",
        solicitud_id=solicitud_id,
        total_amount=submitted.total_amount,
        approvals=len(submitted.approvals),
    )
    return submitted


def list_solicitudes(
    store,
    page: int = 1,
    page_size: int = 10,
    status: Optional[SolicitudStatus] = None,
    ministry_id: Optional[int] = None,
    requester_user_id: Optional[int] = None,
) -> tuple[list[Solicitud], int]:
    """Newest first (ties: higher id first). Returns the page and the filtered total."""

    def matches(s: Solicitud) -> bool:
        return (
            (status is None or s.status == status)
            and (ministry_id is None or s.ministry_id == ministry_id)
            and (requester_user_id is None or s.requester_user_id == requester_user_id)
        )

    rows = store.solicitudes.list(matches)
    rows.sort(key=lambda s: (s.created_at, s.id), reverse=True)
    return paginate(rows, page, page_size), len(rows)


def get_dashboard_stats(store) -> dict:
    solicitudes = store.solicitudes.list()
    approved = [s for s in solicitudes if s.status in APPROVED_STATES]
    return {
        "total_solicitudes": len(solicitudes),
        "pending_solicitudes": sum(1 for s in solicitudes if s.status in PENDING_STATES),
        "approved_solicitudes": len(approved),
        "total_amount": round(sum(s.total_amount for s in solicitudes), 2),
        "approved_amount": round(sum(s.total_amount for s in approved), 2),
        "ministries": store.ministries.count(),
        "users": store.users.count(),
    }
