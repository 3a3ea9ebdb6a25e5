"""
Document store access.

Repositories never talk to Supabase directly; they go through a
`DocumentStore`, which only knows collections of records keyed by `id`. This
keeps the repository modules free of query-builder details and lets tests swap
in an in-memory store.

Every failure of the underlying store is raised as `PersistenceError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from postgrest.exceptions import APIError

from domain.errors import PersistenceError
from repositories.client import get_supabase

logger = logging.getLogger(__name__)

# Collection (table) names. Keep these aligned with your database schema.
PRODUCTS: str = "products"
INVOICES: str = "invoices"
SALES: str = "sales"
PURCHASES: str = "purchases"

Record = Dict[str, Any]


class DocumentStore(ABC):
    """Minimal record-oriented persistence interface."""

    @abstractmethod
    def list_all(self, collection: str) -> List[Record]:
        """All records of a collection, in storage order, each with an `id` key."""

    @abstractmethod
    def get_record(self, collection: str, record_id: str) -> Optional[Record]:
        """A single record, or None if absent."""

    @abstractmethod
    def create_record(self, collection: str, fields: Mapping[str, Any]) -> str:
        """Insert a record and return the id assigned to it."""

    @abstractmethod
    def update_record(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        """Merge `fields` into an existing record."""

    @abstractmethod
    def delete_record(self, collection: str, record_id: str) -> None:
        ...

    def count(self, collection: str) -> int:
        return len(self.list_all(collection))


class SupabaseDocumentStore(DocumentStore):
    """DocumentStore backed by Supabase tables with a text `id` primary key."""

    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _execute(self, query: Any, action: str) -> Any:
        try:
            response = query.execute()
        except APIError as e:
            raise PersistenceError(f"Failed to {action}: {e.message}") from e
        except Exception as e:
            raise PersistenceError(f"Failed to {action}: {e}") from e

        error = getattr(response, "error", None)
        if error:
            raise PersistenceError(f"Failed to {action}: {error}")
        return response

    def list_all(self, collection: str) -> List[Record]:
        response = self._execute(
            self.client.table(collection).select("*"),
            f"list {collection}",
        )
        rows = getattr(response, "data", None) or []
        return [dict(row) for row in rows]

    def get_record(self, collection: str, record_id: str) -> Optional[Record]:
        response = self._execute(
            self.client.table(collection).select("*").eq("id", record_id).limit(1),
            f"get {collection} record",
        )
        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        return dict(rows[0])

    def create_record(self, collection: str, fields: Mapping[str, Any]) -> str:
        record_id = str(uuid4())
        payload: Record = {**fields, "id": record_id}

        self._execute(
            self.client.table(collection).insert(payload),
            f"create {collection} record",
        )
        logger.debug("Created record", extra={"collection": collection, "record_id": record_id})
        return record_id

    def update_record(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        payload = {key: value for key, value in fields.items() if key != "id"}
        self._execute(
            self.client.table(collection).update(payload).eq("id", record_id),
            f"update {collection} record",
        )

    def delete_record(self, collection: str, record_id: str) -> None:
        self._execute(
            self.client.table(collection).delete().eq("id", record_id),
            f"delete {collection} record",
        )

    def count(self, collection: str) -> int:
        response = self._execute(
            self.client.table(collection).select("id", count="exact").limit(1),
            f"count {collection}",
        )
        total = getattr(response, "count", None)
        if total is None:
            raise PersistenceError(f"Failed to count {collection}: no count returned")
        return int(total)


__all__ = [
    "DocumentStore",
    "SupabaseDocumentStore",
    "Record",
    "PRODUCTS",
    "INVOICES",
    "SALES",
    "PURCHASES",
]
