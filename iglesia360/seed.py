"""
Demo data loaded into a fresh store when SEED_DEMO_DATA is on.
Timestamps are relative to process start so the dashboard always looks recent.
"""

from datetime import datetime, timedelta, timezone

import structlog

from iglesia360.models import (
    ApprovalInfo,
    ApprovalStatus,
    Ministry,
    PaymentType,
    Solicitud,
    SolicitudItem,
    SolicitudStatus,
    User,
    UserRole,
    UserStatus,
)

logger = structlog.get_logger()

DAY = timedelta(days=1)

USERS = [
    (1, "admin@iglesia360.com", "Juan García", "+34 666 111 111", [UserRole.ADMIN], 0, 0),
    (2, "tesorero@iglesia360.com", "María López", "+34 666 222 222", [UserRole.TESORERO], 30, 1),
    (3, "pastor@iglesia360.com", "Carlos Rodríguez", "+34 666 333 333", [UserRole.PASTOR_GENERAL], 60, 2),
    (4, "pastor_red1@iglesia360.com", "Ana Martínez", "+34 666 444 444", [UserRole.PASTOR_RED], 90, 3),
    (5, "miembro1@iglesia360.com", "Pedro Sánchez", "+34 666 555 555", [UserRole.USUARIO], 365, 7),
    (6, "miembro2@iglesia360.com", "Rosa González", "+34 666 666 666", [UserRole.USUARIO], 365, 14),
]

MINISTRIES = [
    (1, "Ministerio de Alabanza", "Responsable de la música y adoración", 4, 5000.0),
    (2, "Ministerio de Jóvenes", "Actividades y discipulado de jóvenes", 4, 8000.0),
    (3, "Ministerio de Niños", "Cuidado y educación de niños", 5, 6000.0),
    (4, "Ministerio de Obras Sociales", "Ayuda a la comunidad", 6, 10000.0),
    (5, "Ministerio de Misiones", "Actividades misioneras y evangelismo", 3, 15000.0),
]


def _users(now: datetime) -> list[User]:
    return [
        User(
            id=uid,
            email=email,
            name=name,
            phone=phone,
            status=UserStatus.ACTIVE,
            roles=roles,
            last_login=now - login_days * DAY,
            created_at=now - age_days * DAY,
            updated_at=now - login_days * DAY,
        )
        for uid, email, name, phone, roles, age_days, login_days in USERS
    ]


def _ministries(now: datetime) -> list[Ministry]:
    return [
        Ministry(
            id=mid,
            code=f"MIN{mid:03d}",
            name=name,
            description=description,
            responsible_user_id=responsible,
            budget_limit=budget,
            currency="PEN",
            status="active",
            created_at=now,
            updated_at=now,
        )
        for mid, name, description, responsible, budget in MINISTRIES
    ]


def _items(*rows) -> list[SolicitudItem]:
    return [
        SolicitudItem(
            item_number=idx,
            description=description,
            amount=amount,
            quantity=quantity,
            unit_price=unit_price,
        )
        for idx, (description, amount, quantity, unit_price) in enumerate(rows, start=1)
    ]


def _approval(
    approval_id, solicitud_id, approver_id, approver_name, order,
    status=ApprovalStatus.PENDIENTE, decided_at=None, comments=None, now=None,
) -> ApprovalInfo:
    return ApprovalInfo(
        id=approval_id,
        solicitud_id=solicitud_id,
        approver_user_id=approver_id,
        approver_name=approver_name,
        approval_order=order,
        status=status,
        required_approval=True,
        approval_date=decided_at,
        comments=comments,
        created_at=now,
        updated_at=decided_at or now,
    )


def _solicitudes(now: datetime) -> list[Solicitud]:
    aprobado = ApprovalStatus.APROBADO
    ana, maria, carlos = "Ana Martínez", "María López", "Carlos Rodríguez"

    def sol(sid, ministry_id, ministry_name, requester, responsible, title,
            description, status, detail, items, approvals, age_days,
            updated_days=None, submitted_days=None, completed_days=None):
        return Solicitud(
            id=sid,
            code=f"SOL{sid:03d}",
            ministry_id=ministry_id,
            ministry_name=ministry_name,
            requester_user_id=requester[0],
            requester_name=requester[1],
            responsible_user_id=responsible[0],
            responsible_name=responsible[1],
            title=title,
            description=description,
            total_amount=round(sum(i.amount for i in items), 2),
            currency="USD",
            status=status,
            payment_type=PaymentType.TERCEROS,
            payment_detail=detail,
            items=items,
            approvals=approvals,
            created_at=now - age_days * DAY,
            updated_at=now - (updated_days if updated_days is not None else age_days) * DAY,
            submitted_at=now - submitted_days * DAY if submitted_days is not None else None,
            completed_at=now - completed_days * DAY if completed_days is not None else None,
        )

    pedro, rosa = (5, "Pedro Sánchez"), (6, "Rosa González")
    return [
        sol(
            1, 1, "Ministerio de Alabanza", pedro, (4, ana),
            "Equipos de sonido para alabanza",
            "Compra de micrófono inalámbrico, amplificador y cables de audio de alta "
            "calidad para mejorar la calidad de sonido en los servicios.",
            SolicitudStatus.BORRADOR, "Pagar a proveedor TechSound Inc.",
            _items(
                ("Micrófono inalámbrico profesional", 800.0, 2, 400.0),
                ("Amplificador de audio 500W", 1200.0, 1, 1200.0),
                ("Cables de audio y conectores", 500.0, 5, 100.0),
            ),
            [], 30,
        ),
        sol(
            2, 2, "Ministerio de Jóvenes", pedro, (4, ana),
            "Retiro de jóvenes verano 2024",
            "Viaje de campamento para jóvenes incluyendo transporte, alojamiento y "
            "comidas para 40 personas.",
            SolicitudStatus.PENDIENTE, "Pagar a empresa de turismo Valle Bonito",
            _items(
                ("Transporte en autobús (4 buses)", 2000.0, 4, 500.0),
                ("Alojamiento (2 noches)", 1800.0, 40, 45.0),
                ("Comidas (desayuno, almuerzo, cena)", 700.0, 40, 17.5),
            ),
            [
                _approval(1, 2, 4, ana, 1, now=now),
                _approval(2, 2, 2, maria, 2, now=now),
            ],
            20, submitted_days=20,
        ),
        sol(
            3, 3, "Ministerio de Niños", rosa, (4, ana),
            "Material didáctico para niños",
            "Libros de colorear, juguetes educativos y materiales para las lecciones "
            "bíblicas semanales.",
            SolicitudStatus.EN_REVISION, "Pagar a Editorial Infantil Cristiana",
            _items(
                ("Libros de colorear cristianos", 600.0, 3, 200.0),
                ("Juguetes educativos variados", 800.0, 2, 400.0),
                ("Material para manualidades", 400.0, 1, 400.0),
            ),
            [
                _approval(3, 3, 4, ana, 1, aprobado, now - 10 * DAY,
                          "Aprobado por pastor de red", now=now),
                _approval(4, 3, 2, maria, 2, now=now),
            ],
            16, submitted_days=16,
        ),
        sol(
            4, 4, "Ministerio de Obras Sociales", pedro, (6, "Rosa González"),
            "Kits de alimentos para familias en necesidad",
            "Distribución de paquetes de alimentos básicos a 30 familias de la "
            "comunidad durante el mes.",
            SolicitudStatus.APROBADO, "Pagar a proveedor local de alimentos",
            _items(("Paquetes básicos de alimentos", 3200.0, 30, 106.67)),
            [
                _approval(5, 4, 6, "Rosa González", 1, aprobado, now - 6 * DAY,
                          "Aprobado por responsable de ministerio", now=now),
                _approval(6, 4, 2, maria, 2, aprobado, now - 6 * DAY,
                          "Aprobado por tesorero con observaciones sobre presupuesto", now=now),
            ],
            7, updated_days=6, submitted_days=7,
        ),
        sol(
            5, 5, "Ministerio de Misiones", rosa, (3, carlos),
            "Viaje misionero a región rural",
            "Viaje de evangelismo y construcción de una pequeña capilla en zona rural. "
            "Incluye transporte, alojamiento y materiales de construcción.",
            SolicitudStatus.APROBADO, "Pagar a coordinador de misiones",
            _items(
                ("Transporte", 2000.0, 1, 2000.0),
                ("Alojamiento y comidas", 2500.0, 1, 2500.0),
                ("Materiales de construcción", 2000.0, 1, 2000.0),
            ),
            [
                _approval(7, 5, 4, ana, 1, aprobado, now - 4 * DAY,
                          "Aprobado por pastor de red", now=now),
                _approval(8, 5, 3, carlos, 2, aprobado, now - 4 * DAY,
                          "Aprobado por pastor general - proyecto importante", now=now),
                _approval(9, 5, 2, maria, 3, aprobado, now - 4 * DAY,
                          "Aprobado por tesorero", now=now),
            ],
            5, updated_days=4, submitted_days=5,
        ),
        sol(
            6, 1, "Ministerio de Alabanza", pedro, (4, ana),
            "Reparación de instrumentos musicales",
            "Mantenimiento y reparación de órgano, guitarras y batería de la iglesia.",
            SolicitudStatus.COMPLETADO, "Pagar a taller de reparaciones Harmonia",
            _items(("Reparación y mantenimiento de instrumentos", 1200.0, 1, 1200.0)),
            [
                _approval(10, 6, 4, ana, 1, aprobado, now - 3 * DAY, now=now),
                _approval(11, 6, 2, maria, 2, aprobado, now - 3 * DAY, now=now),
            ],
            4, updated_days=2, submitted_days=4, completed_days=2,
        ),
    ]


def seed_store(store, with_solicitudes: bool = True) -> None:
    now = datetime.now(timezone.utc)
    for user in _users(now):
        store.users.insert(user)
    for ministry in _ministries(now):
        store.ministries.insert(ministry)
    if with_solicitudes:
        for solicitud in _solicitudes(now):
            store.solicitudes.insert(solicitud)
    logger.info(
        "demo_data_seeded",
        users=store.users.count(),
        ministries=store.ministries.count(),
        solicitudes=store.solicitudes.count(),
    )
