import pytest
from httpx import ASGITransport, AsyncClient

from iglesia360.database import build_store, get_store
from iglesia360.main import app
from iglesia360.seed import seed_store


@pytest.fixture
def store():
    """Full demo data: 6 users, 5 ministries, solicitudes SOL001-SOL006."""
    return build_store(seed=True)


@pytest.fixture
def blank_store():
    """Users and ministries only; no solicitudes yet."""
    s = build_store(seed=False)
    seed_store(s, with_solicitudes=False)
    return s


@pytest.fixture
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def solicitud_payload():
    """Minimal valid create body as the frontend sends it."""

    def _build(*amounts, **overrides):
        body = {
            "ministryId": 1,
            "responsibleUserId": 4,
            "title": "Equipos de sonido",
            "description": "Micrófonos y cables para el servicio dominical",
            "paymentType": "uno_mismo",
            "items": [
                {"description": f"Item {i}", "amount": amount}
                for i, amount in enumerate(amounts or (2500,), start=1)
            ],
        }
        body.update(overrides)
        return body

    return _build
