"""
Tests for the SQL-backed document store and the store call policy.
"""
import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from conftest import InMemoryDocumentStore
from src.common.store.document_store import DocumentNotFound, StoreError, StoreTimeoutError
from src.common.store.sql_store import SqlDocumentStore
from src.models.models import Base


@pytest.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlDocumentStore(sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


class TestSqlDocumentStore:

    async def test_insert_and_find_one(self, sql_store):
        doc_id = await sql_store.insert("users", {"name": "Jane", "role": "patient"})

        assert await sql_store.find_one("users", doc_id) == {"name": "Jane", "role": "patient", "id": doc_id}
        assert await sql_store.find_one("users", "missing") is None
        assert await sql_store.find_one("appointments", doc_id) is None

    async def test_insert_keeps_given_id(self, sql_store):
        assert await sql_store.insert("users", {"id": "u-1", "name": "Jane"}) == "u-1"

    async def test_typed_filters_in_insertion_order(self, sql_store):
        await sql_store.insert("notifications", {"userId": "u-1", "read": False, "priority": 1})
        await sql_store.insert("notifications", {"userId": "u-1", "read": True, "priority": 2})
        await sql_store.insert("notifications", {"userId": "u-2", "read": False, "priority": 1})
        await sql_store.insert("notifications", {"userId": "u-1", "read": False, "priority": 3})

        unread = await sql_store.find_many("notifications", {"userId": "u-1", "read": False})
        first_priority = await sql_store.find_many("notifications", {"priority": 1}, limit=1)

        assert [n["priority"] for n in unread] == [1, 3]
        assert [n["userId"] for n in first_priority] == ["u-1"]

    async def test_null_filter_matches_missing_and_null(self, sql_store):
        await sql_store.insert("documents", {"name": "loose", "folderId": None})
        await sql_store.insert("documents", {"name": "filed", "folderId": "f-1"})

        loose = await sql_store.find_many("documents", {"folderId": None})

        assert [d["name"] for d in loose] == ["loose"]

    async def test_update_merges(self, sql_store):
        doc_id = await sql_store.insert("appointments", {"status": "scheduled", "time": "09:00"})

        await sql_store.update("appointments", doc_id, {"status": "cancelled"})

        assert await sql_store.find_one("appointments", doc_id) == {
            "status": "cancelled", "time": "09:00", "id": doc_id
        }

    async def test_update_missing_raises(self, sql_store):
        with pytest.raises(DocumentNotFound):
            await sql_store.update("appointments", "missing", {"status": "cancelled"})

    async def test_delete(self, sql_store):
        doc_id = await sql_store.insert("folders", {"name": "Scans"})

        assert await sql_store.delete("folders", doc_id) is True
        assert await sql_store.delete("folders", doc_id) is False


class SlowStore(InMemoryDocumentStore):

    async def _find_one(self, collection, doc_id):
        await asyncio.sleep(1)
        return None


class TestCallPolicy:

    async def test_reads_are_retried(self):
        store = InMemoryDocumentStore(read_retries=2)
        attempts = []

        def first_two_attempts(_):
            attempts.append(1)
            return len(attempts) <= 2

        store.fail_when("find_many", "users", first_two_attempts)

        assert await store.find_many("users") == []
        assert store.calls.count(("find_many", "users")) == 3

    async def test_reads_give_up_after_retries(self):
        store = InMemoryDocumentStore(read_retries=1)
        store.fail_when("find_many", "users")

        with pytest.raises(StoreError):
            await store.find_many("users")
        assert store.calls.count(("find_many", "users")) == 2

    async def test_writes_are_not_retried(self):
        store = InMemoryDocumentStore(read_retries=3)
        store.fail_when("insert", "users")

        with pytest.raises(StoreError):
            await store.insert("users", {"name": "x"})
        assert store.calls.count(("insert", "users")) == 1

    async def test_timeout(self):
        store = SlowStore(timeout=0.01, read_retries=0)

        with pytest.raises(StoreTimeoutError):
            await store.find_one("users", "u-1")
