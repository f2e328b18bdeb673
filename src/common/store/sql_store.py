# src/common/store/sql_store.py
"""Document store backed by a single JSON table through async SQLAlchemy."""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.models import StoredDocument
from .document_store import DocumentStore, DocumentNotFound


def _field_equals(key: str, value: Any):
    """Build a WHERE clause comparing one JSON field to a scalar."""
    field = StoredDocument.data[key]
    if value is None:
        return field.as_string().is_(None)
    if isinstance(value, bool):
        return field.as_boolean() == value
    if isinstance(value, int):
        return field.as_integer() == value
    if isinstance(value, float):
        return field.as_float() == value
    return field.as_string() == str(getattr(value, "value", value))


class SqlDocumentStore(DocumentStore):

    def __init__(self, session_factory, **kwargs):
        super().__init__(**kwargs)
        self._session_factory = session_factory

    async def _get_row(self, session: AsyncSession, collection: str, doc_id: str) -> Optional[StoredDocument]:
        result = await session.execute(
            select(StoredDocument)
            .where(StoredDocument.collection == collection)
            .where(StoredDocument.doc_id == doc_id)
        )
        return result.scalar_one_or_none()

    async def _find_many(self, collection: str, filters: Dict[str, Any], limit: Optional[int]) -> List[dict]:
        query = select(StoredDocument).where(StoredDocument.collection == collection)
        for key, value in filters.items():
            query = query.where(_field_equals(key, value))
        query = query.order_by(StoredDocument.seq)
        if limit is not None:
            query = query.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return [row.to_record() for row in result.scalars().all()]

    async def _find_one(self, collection: str, doc_id: str) -> Optional[dict]:
        async with self._session_factory() as session:
            row = await self._get_row(session, collection, doc_id)
            return row.to_record() if row else None

    async def _insert(self, collection: str, record: dict) -> str:
        data = dict(record)
        doc_id = str(data.pop("id", None) or uuid.uuid4().hex)

        async with self._session_factory() as session:
            session.add(StoredDocument(collection=collection, doc_id=doc_id, data=data))
            await session.commit()
        return doc_id

    async def _update(self, collection: str, doc_id: str, partial: dict) -> None:
        async with self._session_factory() as session:
            row = await self._get_row(session, collection, doc_id)
            if row is None:
                raise DocumentNotFound(f"{collection}/{doc_id} does not exist")
            # Reassign so the JSON column is flagged dirty
            row.data = {**(row.data or {}), **{k: v for k, v in partial.items() if k != "id"}}
            await session.commit()

    async def _delete(self, collection: str, doc_id: str) -> bool:
        async with self._session_factory() as session:
            row = await self._get_row(session, collection, doc_id)
            if row is None:
                return False
            await session.delete(row)
            await session.commit()
            return True
