"""Audit logging service: records solicitud state changes."""

from datetime import datetime, timezone
from typing import Optional

import structlog

from iglesia360.exceptions import NotFoundError
from iglesia360.models import AuditLog, Solicitud

logger = structlog.get_logger()


def snapshot(solicitud: Solicitud) -> dict:
    """JSON-safe view of the fields an audit entry cares about."""
    return {
        "status": solicitud.status.value,
        "title": solicitud.title,
        "description": solicitud.description,
        "responsibleUserId": solicitud.responsible_user_id,
        "paymentType": solicitud.payment_type.value,
        "paymentDetail": solicitud.payment_detail,
        "totalAmount": solicitud.total_amount,
        "items": len(solicitud.items),
        "approvals": [
            {"approverUserId": a.approver_user_id, "status": a.status.value}
            for a in solicitud.approvals
        ],
    }


def _compute_changed_fields(
    before: Optional[dict], after: Optional[dict]
) -> Optional[list[str]]:
    """Diff two state dicts and return list of changed field names."""
    if not before or not after:
        return None
    changed = []
    all_keys = set(before.keys()) | set(after.keys())
    for key in sorted(all_keys):
        if before.get(key) != after.get(key):
            changed.append(key)
    return changed or None


def create_audit_log(
    store,
    solicitud_id: int,
    action: str,
    user_id: Optional[int] = None,
    old_value: Optional[dict] = None,
    new_value: Optional[dict] = None,
    comment: Optional[str] = None,
) -> AuditLog:
    """
    Append an audit entry.

    Called inside the caller's ``store.lock`` block, after the entity write.
    """
    user = store.users.get(user_id) if user_id is not None else None
    audit = AuditLog(
        id=store.audit_logs.next_id(),
        solicitud_id=solicitud_id,
        user_id=user_id,
        user_name=user.name if user else None,
        action=action,
        old_value=old_value,
        new_value=new_value,
        changed_fields=_compute_changed_fields(old_value, new_value),
        comment=comment,
        created_at=datetime.now(timezone.utc),
    )
    store.audit_logs.insert(audit)

    logger.info(
        "audit_log_created",
        action=action,
        solicitud_id=solicitud_id,
        user_id=user_id,
    )
    return audit


def list_audit_logs(store, solicitud_id: int) -> list[AuditLog]:
    if store.solicitudes.get(solicitud_id) is None:
        raise NotFoundError("Solicitud not found")
    logs = store.audit_logs.list(lambda log: log.solicitud_id == solicitud_id)
    return sorted(logs, key=lambda log: log.id)
