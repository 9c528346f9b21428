"""
Approval service: chain construction, approve/reject recording.

Chain generated on submit:
  order 1  responsible user of the solicitud   (always required)
  order 2  treasurer                           (required only if total > APPROVAL_THRESHOLD)

Approvals are recorded on the approver's own entry; they never move the
solicitud's status.
"""

import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog

from iglesia360.config import settings
from iglesia360.exceptions import NotFoundError
from iglesia360.models import ApprovalInfo, ApprovalStatus, Solicitud, User
from iglesia360.services.audit_service import create_audit_log, snapshot
from iglesia360.services.validation import check_rejection_reason

logger = structlog.get_logger()


@dataclass
class ApprovalStep:
    role: str
    user_id: int
    approval_order: int
    required: bool
    name: Optional[str] = None


def requires_treasurer(total_amount: float) -> bool:
    # Strictly greater: a total of exactly the threshold stays optional
    return total_amount > settings.APPROVAL_THRESHOLD


def get_role_user(store, role: str) -> Optional[User]:
    """Find first active user with given role."""
    candidates = store.users.list(lambda u: u.is_active and role in u.roles)
    return min(candidates, key=lambda u: u.id, default=None)


def get_treasurer(store) -> tuple[int, Optional[str]]:
    treasurer = get_role_user(store, settings.TREASURER_ROLE)
    if treasurer:
        return treasurer.id, treasurer.name
    fallback = store.users.get(settings.TREASURER_USER_ID)
    logger.warning("treasurer_fallback", user_id=settings.TREASURER_USER_ID)
    return settings.TREASURER_USER_ID, fallback.name if fallback else None


def get_approval_chain(store, solicitud: Solicitud) -> list[ApprovalStep]:
    """Build ordered approval chain based on the amount threshold."""
    responsible = store.users.get(solicitud.responsible_user_id)
    chain = [
        ApprovalStep(
            role="responsable",
            user_id=solicitud.responsible_user_id,
            name=responsible.name if responsible else None,
            approval_order=1,
            required=True,
        )
    ]

    treasurer_id, treasurer_name = get_treasurer(store)
    chain.append(ApprovalStep(
        role=settings.TREASURER_ROLE,
        user_id=treasurer_id,
        name=treasurer_name,
        approval_order=2,
        required=requires_treasurer(solicitud.total_amount),
    ))
    return chain


def create_approval_workflow(
    store, solicitud: Solicitud, now: Optional[datetime] = None
) -> list[ApprovalInfo]:
    """ApprovalInfo entries for a freshly submitted solicitud. All start pendiente."""
    now = now or datetime.now(timezone.utc)
    approvals = [
        ApprovalInfo(
            id=store.next_approval_id(),
            solicitud_id=solicitud.id,
            approver_user_id=step.user_id,
            approver_name=step.name,
            approval_order=step.approval_order,
            status=ApprovalStatus.PENDIENTE,
            required_approval=step.required,
            created_at=now,
            updated_at=now,
        )
        for step in get_approval_chain(store, solicitud)
    ]

    logger.info(
        "approval_workflow_created",
        solicitud_id=solicitud.id,
        steps=len(approvals),
        treasurer_required=approvals[-1].required_approval,
    )
    return approvals


def all_required_approved(solicitud: Solicitud) -> bool:
    required = [a for a in solicitud.approvals if a.required_approval]
    return bool(required) and all(a.status == ApprovalStatus.APROBADO for a in required)


def _get_solicitud(store, solicitud_id: int) -> Solicitud:
    solicitud = store.solicitudes.get(solicitud_id)
    if solicitud is None:
        raise NotFoundError("Solicitud not found")
    return solicitud


def _select_entry(
    approvals: list[ApprovalInfo], approver_id: int
) -> Optional[ApprovalInfo]:
    """Approver's lowest-order pending entry, else their most recent one."""
    mine = [a for a in approvals if a.approver_user_id == approver_id]
    pending = [a for a in mine if a.status == ApprovalStatus.PENDIENTE]
    if pending:
        return min(pending, key=lambda a: (a.approval_order, a.id))
    return max(mine, key=lambda a: (a.updated_at, a.id), default=None)


def _record_decision(
    store,
    solicitud_id: int,
    approver_id: int,
    decision: ApprovalStatus,
    comments: Optional[str] = None,
    rejection_reason: Optional[str] = None,
) -> tuple[ApprovalInfo, Solicitud]:
    with store.lock:
        current = _get_solicitud(store, solicitud_id)
        updated = copy.deepcopy(current)
        now = datetime.now(timezone.utc)

        entry = _select_entry(updated.approvals, approver_id)
        if entry is None:
            approver = store.users.get(approver_id)
            entry = ApprovalInfo(
                id=store.next_approval_id(),
                solicitud_id=solicitud_id,
                approver_user_id=approver_id,
                approver_name=approver.name if approver else None,
                approval_order=max((a.approval_order for a in updated.approvals), default=0) + 1,
                status=ApprovalStatus.PENDIENTE,
                required_approval=False,
                created_at=now,
                updated_at=now,
            )
            updated.approvals.append(entry)

        entry.status = decision
        entry.approval_date = now
        entry.comments = comments
        entry.rejection_reason = rejection_reason
        entry.updated_at = now
        updated.updated_at = now

        store.solicitudes.replace(updated)
        create_audit_log(
            store,
            solicitud_id,
            "approved" if decision == ApprovalStatus.APROBADO else "rejected",
            user_id=approver_id,
            old_value=snapshot(current),
            new_value=snapshot(updated),
            comment=rejection_reason or comments,
        )
    return entry, updated


def approve_solicitud(
    store, solicitud_id: int, approver_id: int, comments: Optional[str] = None
) -> ApprovalInfo:
    entry, solicitud = _record_decision(
        store, solicitud_id, approver_id, ApprovalStatus.APROBADO, comments=comments
    )
    logger.info(
        "solicitud_approved",
        solicitud_id=solicitud_id,
        approver_id=approver_id,
        approval_order=entry.approval_order,
        all_required_approved=all_required_approved(solicitud),
    )
    return entry


def reject_solicitud(
    store,
    solicitud_id: int,
    approver_id: int,
    rejection_reason: Optional[str],
    comments: Optional[str] = None,
) -> ApprovalInfo:
    check_rejection_reason(rejection_reason)
    entry, _ = _record_decision(
        store,
        solicitud_id,
        approver_id,
        ApprovalStatus.RECHAZADO,
        comments=comments,
        rejection_reason=rejection_reason.strip(),
    )
    logger.info(
        "solicitud_rejected",
        solicitud_id=solicitud_id,
        approver_id=approver_id,
        approval_order=entry.approval_order,
    )
    return entry


def list_approvals(store, solicitud_id: int) -> list[ApprovalInfo]:
    solicitud = _get_solicitud(store, solicitud_id)
    return sorted(solicitud.approvals, key=lambda a: (a.approval_order, a.id))
