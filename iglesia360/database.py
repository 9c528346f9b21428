import threading
from dataclasses import dataclass, field
from typing import Optional

import structlog

from iglesia360.config import settings
from iglesia360.models import AuditLog, Ministry, Solicitud, User
from iglesia360.repositories import InMemoryRepository, Repository

logger = structlog.get_logger()


@dataclass
class Store:
    solicitudes: Repository[Solicitud]
    ministries: Repository[Ministry]
    users: Repository[User]
    audit_logs: Repository[AuditLog]
    # Held by every mutating workflow operation for its whole duration
    lock: threading.RLock = field(default_factory=threading.RLock)
    _approval_seq: int = 0

    def next_approval_id(self) -> int:
        with self.lock:
            if self._approval_seq == 0:
                existing = [
                    a.id for s in self.solicitudes.list() for a in s.approvals
                ]
                self._approval_seq = max(existing, default=0)
            self._approval_seq += 1
            return self._approval_seq


def build_store(seed: bool = False) -> Store:
    store = Store(
        solicitudes=InMemoryRepository(),
        ministries=InMemoryRepository(),
        users=InMemoryRepository(),
        audit_logs=InMemoryRepository(),
    )
    if seed:
        from iglesia360.seed import seed_store

        seed_store(store)
    return store


_store: Optional[Store] = None


def get_store() -> Store:
    """FastAPI dependency: the process-wide store, created on first use."""
    global _store
    if _store is None:
        _store = build_store(seed=settings.SEED_DEMO_DATA)
    return _store


def init_store():
    store = get_store()
    logger.info(
        "store_ready",
        solicitudes=store.solicitudes.count(),
        ministries=store.ministries.count(),
        users=store.users.count(),
    )


def close_store():
    global _store
    _store = None
    logger.info("store_released")
