# src/common/store/document_store.py
"""
Document store interface.

Services depend only on the five operations defined here. Every call runs
under a timeout; reads are retried a bounded number of times, writes never
are (an insert is not idempotent).
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional

from src.common.config import settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A document store call failed."""


class StoreTimeoutError(StoreError):
    """A document store call did not complete within the configured timeout."""


class DocumentNotFound(StoreError):
    """An update targeted a document that does not exist."""


class DocumentStore(ABC):

    def __init__(self, timeout: Optional[float] = None, read_retries: Optional[int] = None):
        self.timeout = settings.STORE_TIMEOUT_SECONDS if timeout is None else timeout
        self.read_retries = settings.STORE_READ_RETRIES if read_retries is None else read_retries

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def find_many(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None
    ) -> List[dict]:
        """Return records whose fields equal every value in ``filters``, in insertion order."""
        return await self._call(
            f"find_many({collection})",
            lambda: self._find_many(collection, filters or {}, limit),
            self.read_retries
        )

    async def find_one(self, collection: str, doc_id: str) -> Optional[dict]:
        """Return one record by id, or None."""
        return await self._call(
            f"find_one({collection}, {doc_id})",
            lambda: self._find_one(collection, doc_id),
            self.read_retries
        )

    async def insert(self, collection: str, record: dict) -> str:
        """Store a new record and return its id."""
        return await self._call(
            f"insert({collection})",
            lambda: self._insert(collection, record),
            0
        )

    async def update(self, collection: str, doc_id: str, partial: dict) -> None:
        """Merge ``partial`` into an existing record. Raises DocumentNotFound."""
        await self._call(
            f"update({collection}, {doc_id})",
            lambda: self._update(collection, doc_id, partial),
            0
        )

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Remove a record. Returns False when it did not exist."""
        return await self._call(
            f"delete({collection}, {doc_id})",
            lambda: self._delete(collection, doc_id),
            0
        )

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    async def _find_many(self, collection: str, filters: Dict[str, Any], limit: Optional[int]) -> List[dict]:
        ...

    @abstractmethod
    async def _find_one(self, collection: str, doc_id: str) -> Optional[dict]:
        ...

    @abstractmethod
    async def _insert(self, collection: str, record: dict) -> str:
        ...

    @abstractmethod
    async def _update(self, collection: str, doc_id: str, partial: dict) -> None:
        ...

    @abstractmethod
    async def _delete(self, collection: str, doc_id: str) -> bool:
        ...

    # ------------------------------------------------------------------

    async def _call(self, description: str, operation: Callable[[], Awaitable[Any]], retries: int) -> Any:
        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(operation(), timeout=self.timeout)
            except DocumentNotFound:
                raise
            except asyncio.TimeoutError as e:
                error = StoreTimeoutError(f"{description} timed out after {self.timeout}s")
                error.__cause__ = e
            except StoreError as e:
                error = e
            except Exception as e:
                error = StoreError(f"{description} failed: {e}")
                error.__cause__ = e

            if attempt >= retries:
                raise error
            attempt += 1
            logger.warning("Retrying %s (attempt %d of %d): %s", description, attempt, retries, error)
