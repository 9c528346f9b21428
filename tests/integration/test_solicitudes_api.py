"""
HTTP-level tests for /api/solicitudes: envelope shape, status codes and the
end-to-end draft -> submit -> approve/reject flow against the demo store.
"""

import pytest
from httpx import AsyncClient

from iglesia360.services import solicitud_service


async def _create(client: AsyncClient, body: dict, **headers) -> dict:
    response = await client.post("/api/solicitudes", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ---------------------------------------------------------------------------
# create / read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_returns_camel_case_draft(client, solicitud_payload):
    response = await client.post("/api/solicitudes", json=solicitud_payload(1000, 1500))
    assert response.status_code == 201
    body = response.json()

    assert body["success"] is True
    assert body["message"] == "Solicitud created successfully"
    data = body["data"]
    assert data["code"] == "SOL007"
    assert data["status"] == "borrador"
    assert data["totalAmount"] == 2500
    assert data["currency"] == "PEN"
    assert data["requesterUserId"] == 5
    assert data["ministryName"] == "Ministerio de Alabanza"
    assert [i["itemNumber"] for i in data["items"]] == [1, 2]
    # unset optionals are omitted, not null
    assert "submittedAt" not in data
    assert "error" not in body


@pytest.mark.asyncio
async def test_create_uses_acting_user_header(client, solicitud_payload):
    data = await _create(client, solicitud_payload(), **{"X-User-Id": "6"})
    assert data["requesterUserId"] == 6
    assert data["requesterName"] == "Rosa González"


@pytest.mark.asyncio
async def test_create_missing_fields_is_400(client, solicitud_payload):
    response = await client.post(
        "/api/solicitudes", json=solicitud_payload(title="", items=[])
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Missing required fields")


@pytest.mark.asyncio
async def test_create_terceros_with_structured_account(client, solicitud_payload):
    body = solicitud_payload(
        paymentType="terceros",
        thirdPartyAccount={
            "bankName": "Interbank",
            "accountNumber": "200-3001234567",
            "documentType": "RUC",
            "document": "20123456789",
            "cci": "00320000300123456735",
        },
    )
    data = await _create(client, body)
    assert data["paymentType"] == "terceros"
    assert data["paymentDetail"] == (
        "Banco: Interbank\nCuenta: 200-3001234567\nTipo de Documento: RUC\n"
        "Documento: 20123456789\nCCI: 00320000300123456735"
    )


@pytest.mark.asyncio
async def test_create_terceros_with_incomplete_account_is_400(client, solicitud_payload):
    body = solicitud_payload(paymentType="terceros", thirdPartyAccount={"bankName": "BCP"})
    response = await client.post("/api/solicitudes", json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_malformed_json_is_400(client):
    response = await client.post(
        "/api/solicitudes",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_nan_amount_is_400_and_nothing_stored(client, store):
    response = await client.post(
        "/api/solicitudes",
        content=(
            b'{"ministryId": 1, "responsibleUserId": 4, "title": "Sonido",'
            b' "description": "Parlantes", "items": [{"description": "x", "amount": NaN}]}'
        ),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Item 1: amount must be greater than 0"
    assert store.solicitudes.count() == 6


@pytest.mark.asyncio
async def test_wrong_types_are_400(client, solicitud_payload):
    response = await client.post(
        "/api/solicitudes", json=solicitud_payload(ministryId="uno")
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_one_and_not_found(client):
    response = await client.get("/api/solicitudes/5")
    assert response.status_code == 200
    assert response.json()["data"]["code"] == "SOL005"

    missing = await client.get("/api/solicitudes/999")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "Solicitud not found"}

    bad_id = await client.get("/api/solicitudes/abc")
    assert bad_id.status_code == 400


# ---------------------------------------------------------------------------
# list / stats
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_pagination_envelope(client):
    response = await client.get("/api/solicitudes", params={"page": 2, "pageSize": 4})
    body = response.json()

    assert response.status_code == 200
    assert body["total"] == 6
    assert body["page"] == 2
    assert body["pageSize"] == 4
    assert body["totalPages"] == 2
    assert [s["id"] for s in body["data"]] == [2, 1]


@pytest.mark.asyncio
async def test_list_page_past_end_is_empty(client):
    body = (await client.get("/api/solicitudes", params={"page": 9})).json()
    assert body["data"] == []
    assert body["total"] == 6


@pytest.mark.asyncio
async def test_list_filters(client):
    body = (await client.get(
        "/api/solicitudes", params={"status": "aprobado", "requesterUserId": 6}
    )).json()
    assert [s["code"] for s in body["data"]] == ["SOL005"]

    invalid = await client.get("/api/solicitudes", params={"status": "archivado"})
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_dashboard_stats(client):
    response = await client.get("/api/solicitudes/dashboard/stats")
    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalSolicitudes": 6,
        "pendingSolicitudes": 2,
        "approvedSolicitudes": 3,
        "totalAmount": 19700.0,
        "approvedAmount": 10900.0,
        "ministries": 5,
        "users": 6,
    }


# ---------------------------------------------------------------------------
# update / submit
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_draft_items(client, solicitud_payload):
    created = await _create(client, solicitud_payload(100))
    response = await client.put(
        f"/api/solicitudes/{created['id']}",
        json={"items": [
            {"description": "Sillas", "quantity": 10, "unitPrice": 25.5},
            {"description": "Mesa", "amount": 45},
        ]},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalAmount"] == 300.0
    assert [(i["itemNumber"], i["amount"]) for i in data["items"]] == [(1, 255.0), (2, 45.0)]
    assert data["title"] == created["title"]


@pytest.mark.asyncio
async def test_update_pendiente_is_403_and_unchanged(client):
    before = (await client.get("/api/solicitudes/2")).json()["data"]

    response = await client.put("/api/solicitudes/2", json={"title": "Cambio tardío"})
    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "Can only edit draft solicitudes"}

    after = (await client.get("/api/solicitudes/2")).json()["data"]
    assert after == before


@pytest.mark.parametrize(
    "amount, treasurer_required",
    [(2500, False), (6000, True), (3000, False)],
)
@pytest.mark.asyncio
async def test_submit_generates_chain(client, solicitud_payload, amount, treasurer_required):
    created = await _create(client, solicitud_payload(amount))
    assert created["status"] == "borrador"
    assert created["totalAmount"] == amount

    response = await client.post(
        f"/api/solicitudes/{created['id']}/submit", json={"comments": "Por favor revisar"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "pendiente"
    assert data["requesterComments"] == "Por favor revisar"
    assert "submittedAt" in data
    assert [
        (a["approverUserId"], a["approvalOrder"], a["requiredApproval"])
        for a in data["approvals"]
    ] == [(4, 1, True), (2, 2, treasurer_required)]


@pytest.mark.asyncio
async def test_submit_keeps_approval_recorded_on_draft(client, solicitud_payload):
    created = await _create(client, solicitud_payload())
    early = await client.post(
        f"/api/solicitudes/{created['id']}/approve", headers={"X-User-Id": "3"}
    )
    assert early.status_code == 200
    early_id = early.json()["data"]["id"]

    response = await client.post(f"/api/solicitudes/{created['id']}/submit")
    assert response.status_code == 200
    approvals = response.json()["data"]["approvals"]
    assert len(approvals) == 3
    assert early_id in [a["id"] for a in approvals]


@pytest.mark.asyncio
async def test_submit_without_body_and_twice(client):
    first = await client.post("/api/solicitudes/1/submit")
    assert first.status_code == 200
    assert first.json()["message"] == "Solicitud submitted successfully"

    second = await client.post("/api/solicitudes/1/submit")
    assert second.status_code == 403


# ---------------------------------------------------------------------------
# approvals
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_approve_as_default_approver(client):
    response = await client.post("/api/solicitudes/2/approve", json={"comments": "Ok"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Solicitud approved successfully"
    entry = body["data"]
    assert (entry["approverUserId"], entry["approvalOrder"], entry["status"]) == (2, 2, "aprobado")
    assert "approvalDate" in entry

    solicitud = (await client.get("/api/solicitudes/2")).json()["data"]
    assert solicitud["status"] == "pendiente"


@pytest.mark.asyncio
async def test_approve_unknown_is_404(client):
    response = await client.post("/api/solicitudes/999/approve")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_reject_requires_reason(client):
    missing = await client.post("/api/solicitudes/2/reject", json={"comments": "no"})
    assert missing.status_code == 400
    assert missing.json()["error"] == "Rejection reason is required"

    blank = await client.post("/api/solicitudes/2/reject", json={"rejectionReason": "  "})
    assert blank.status_code == 400


@pytest.mark.asyncio
async def test_reject_records_entry(client):
    response = await client.post(
        "/api/solicitudes/3/reject",
        json={"rejectionReason": "Falta cotización"},
        headers={"X-User-Id": "4"},
    )
    assert response.status_code == 200
    entry = response.json()["data"]
    assert entry["status"] == "rechazado"
    assert entry["rejectionReason"] == "Falta cotización"
    # Ana already approved order 1, so her most recent entry is reused
    assert entry["approvalOrder"] == 1


@pytest.mark.asyncio
async def test_list_approvals(client):
    response = await client.get("/api/solicitudes/5/approvals")
    assert response.status_code == 200
    assert [a["approvalOrder"] for a in response.json()["data"]] == [1, 2, 3]

    assert (await client.get("/api/solicitudes/404/approvals")).status_code == 404


@pytest.mark.asyncio
async def test_audit_trail(client, solicitud_payload):
    created = await _create(client, solicitud_payload())
    await client.post(f"/api/solicitudes/{created['id']}/submit")
    await client.post(f"/api/solicitudes/{created['id']}/approve", headers={"X-User-Id": "4"})

    response = await client.get(f"/api/solicitudes/{created['id']}/audit-logs")
    logs = response.json()["data"]
    assert [log["action"] for log in logs] == ["created", "submitted", "approved"]
    assert "status" in logs[1]["changedFields"]
    assert logs[2]["userName"] == "Ana Martínez"


# ---------------------------------------------------------------------------
# unexpected failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500(client, monkeypatch):
    def boom(store):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(solicitud_service, "get_dashboard_stats", boom)
    response = await client.get("/api/solicitudes/dashboard/stats")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "X-Request-ID" in response.headers
