"""Solicitud lifecycle: which status may follow which."""

from typing import Optional

from iglesia360.exceptions import InvalidStateError
from iglesia360.models import SolicitudStatus

S = SolicitudStatus

TRANSITIONS: dict[SolicitudStatus, frozenset[SolicitudStatus]] = {
    S.BORRADOR: frozenset({S.PENDIENTE, S.CANCELADO}),
    S.PENDIENTE: frozenset({S.EN_REVISION, S.CANCELADO}),
    S.EN_REVISION: frozenset({S.APROBADO_PARCIAL, S.APROBADO, S.RECHAZADO, S.CANCELADO}),
    S.APROBADO_PARCIAL: frozenset({S.APROBADO, S.RECHAZADO, S.CANCELADO}),
    S.APROBADO: frozenset({S.COMPLETADO, S.CANCELADO}),
    S.COMPLETADO: frozenset(),
    S.RECHAZADO: frozenset(),
    S.CANCELADO: frozenset(),
}

TERMINAL_STATES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)

# Only drafts accept content edits
EDITABLE_STATES = frozenset({S.BORRADOR})


def can_transition(current: SolicitudStatus, target: SolicitudStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(
    current: SolicitudStatus, target: SolicitudStatus, message: Optional[str] = None
) -> None:
    if not can_transition(current, target):
        raise InvalidStateError(
            message or f"Cannot move solicitud from {current.value} to {target.value}"
        )


def is_terminal(status: SolicitudStatus) -> bool:
    return status in TERMINAL_STATES


def ensure_editable(current: SolicitudStatus) -> None:
    if current not in EDITABLE_STATES:
        raise InvalidStateError("Can only edit draft solicitudes")
