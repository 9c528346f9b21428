"""
Stateless input checks shared by the solicitud and user services.

Every check raises ``ValidationError`` (HTTP 400) and never touches the store,
so callers can run them before acquiring the store lock.
"""

import math
from typing import Any, Iterable, Optional

from iglesia360.exceptions import ValidationError
from iglesia360.models import PaymentType

THIRD_PARTY_FIELDS = (
    ("bank_name", "Banco"),
    ("account_number", "Cuenta"),
    ("document_type", "Tipo de Documento"),
    ("document", "Documento"),
    ("cci", "CCI"),
)


def is_blank(value: Any) -> bool:
    """None, empty/whitespace strings, 0 ids and empty collections are blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return not value


def missing_fields(**fields: Any) -> list[str]:
    return [name for name, value in fields.items() if is_blank(value)]


def check_required_fields(**fields: Any) -> None:
    missing = missing_fields(**fields)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def item_amount(
    amount: Optional[float],
    quantity: Optional[float] = None,
    unit_price: Optional[float] = None,
) -> Optional[float]:
    """quantity x unitPrice wins when both are given; otherwise amount stands."""
    if quantity is not None and unit_price is not None:
        return round(quantity * unit_price, 2)
    return amount


def check_items(items: Iterable[Any]) -> None:
    """Items must already carry their resolved ``amount``."""
    items = list(items)
    if not items:
        raise ValidationError("Missing required fields: items")
    for position, item in enumerate(items, start=1):
        if is_blank(getattr(item, "description", None)):
            raise ValidationError(f"Item {position}: description is required")
        amount = getattr(item, "amount", None)
        # NaN slips past a plain "<= 0" comparison
        if amount is None or not math.isfinite(amount) or amount <= 0:
            raise ValidationError(f"Item {position}: amount must be greater than 0")


def check_payment_detail(
    payment_type: PaymentType, payment_detail: Optional[str]
) -> None:
    if payment_type == PaymentType.TERCEROS and is_blank(payment_detail):
        raise ValidationError("Payment detail is required for third-party payments")


def check_third_party_account(account: Any) -> None:
    missing = [
        name for name, _ in THIRD_PARTY_FIELDS
        if is_blank(getattr(account, name, None))
    ]
    if missing:
        raise ValidationError(
            f"Missing third-party account fields: {', '.join(missing)}"
        )


def format_third_party_account(account: Any) -> str:
    check_third_party_account(account)
    return "\n".join(
        f"{label}: {getattr(account, name).strip()}"
        for name, label in THIRD_PARTY_FIELDS
    )


def check_rejection_reason(reason: Optional[str]) -> None:
    if is_blank(reason):
        raise ValidationError("Rejection reason is required")


def check_solicitud(solicitud) -> None:
    """Full check of a stored or candidate solicitud before it is persisted."""
    check_required_fields(
        title=solicitud.title,
        description=solicitud.description,
        ministryId=solicitud.ministry_id,
        responsibleUserId=solicitud.responsible_user_id,
        items=solicitud.items,
    )
    check_items(solicitud.items)
    check_payment_detail(solicitud.payment_type, solicitud.payment_detail)
