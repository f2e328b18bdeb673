"""
Pytest configuration for the entire test suite.

Settings are pointed at an in-memory SQLite database before any application
module is imported. Service tests run against ``InMemoryDocumentStore``, a
dict-backed store whose calls can be made to fail on demand.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "debug")

import random
import uuid
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import pytest

from src.common.store.document_store import DocumentNotFound, DocumentStore
from src.models.entities import AdminProfile, DoctorProfile, PatientProfile
from src.models.models import Collections


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store. ``fail_when`` makes matching calls raise."""

    def __init__(self, **kwargs):
        kwargs.setdefault("timeout", 1.0)
        kwargs.setdefault("read_retries", 0)
        super().__init__(**kwargs)
        self.collections: Dict[str, Dict[str, dict]] = {}
        self.calls: List[tuple] = []
        self._failures: List[tuple] = []

    def fail_when(
        self,
        operation: str,
        collection: str,
        predicate: Optional[Callable[[Any], bool]] = None,
        error: Optional[Exception] = None
    ):
        self._failures.append((operation, collection, predicate, error or RuntimeError("store offline")))

    def _maybe_fail(self, operation: str, collection: str, payload: Any = None):
        self.calls.append((operation, collection))
        for op, coll, predicate, error in self._failures:
            if op == operation and coll == collection and (predicate is None or predicate(payload)):
                raise error

    def records(self, collection: str) -> List[dict]:
        return [{**data, "id": doc_id} for doc_id, data in self.collections.get(collection, {}).items()]

    @staticmethod
    def _matches(data: dict, filters: Dict[str, Any]) -> bool:
        for key, value in filters.items():
            expected = getattr(value, "value", value)
            if data.get(key) != expected:
                return False
        return True

    async def _find_many(self, collection, filters, limit):
        self._maybe_fail("find_many", collection, filters)
        found = [r for r in self.records(collection) if self._matches(r, filters)]
        return found[:limit] if limit is not None else found

    async def _find_one(self, collection, doc_id):
        self._maybe_fail("find_one", collection, doc_id)
        data = self.collections.get(collection, {}).get(doc_id)
        return {**data, "id": doc_id} if data is not None else None

    async def _insert(self, collection, record):
        self._maybe_fail("insert", collection, record)
        data = dict(record)
        doc_id = data.pop("id", None) or uuid.uuid4().hex
        self.collections.setdefault(collection, {})[doc_id] = data
        return doc_id

    async def _update(self, collection, doc_id, partial):
        self._maybe_fail("update", collection, partial)
        existing = self.collections.get(collection, {}).get(doc_id)
        if existing is None:
            raise DocumentNotFound(f"{collection}/{doc_id}")
        existing.update(partial)

    async def _delete(self, collection, doc_id):
        self._maybe_fail("delete", collection, doc_id)
        return self.collections.get(collection, {}).pop(doc_id, None) is not None


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def today():
    return date(2025, 3, 14)


def make_doctor(doc_id: str, name: str = None, specialization: str = "General Medicine", experience: Optional[int] = 5) -> DoctorProfile:
    return DoctorProfile(
        id=doc_id,
        email=f"{doc_id}@hospital.test",
        name=name or f"Doctor {doc_id}",
        specialization=specialization,
        experience_years=experience,
        qualification="MBBS",
        consultation_fee_minor_units=5000,
    )


async def save_user(store: InMemoryDocumentStore, user):
    await store.insert(Collections.USERS, {"id": user.id, **user.to_document()})
    return user


@pytest.fixture
async def patient(store):
    return await save_user(store, PatientProfile(id="pat-1", email="jane@hospital.test", name="Jane Roe"))


@pytest.fixture
async def other_patient(store):
    return await save_user(store, PatientProfile(id="pat-2", email="sam@hospital.test", name="Sam Poe"))


@pytest.fixture
async def doctor(store):
    return await save_user(store, make_doctor("doc-1", name="Alan Grant", specialization="Cardiology", experience=12))


@pytest.fixture
async def other_doctor(store):
    return await save_user(store, make_doctor("doc-2", name="Ellie Sattler", specialization="Dermatology", experience=8))


@pytest.fixture
async def admin(store):
    return await save_user(store, AdminProfile(id="adm-1", email="admin@hospital.test", name="Ada Admin"))
