"""
Pytest configuration and shared fixtures.

Adds the invoice-hub directory to the Python path so that tests can import
the domain, repositories, services and api modules, and provides an
in-memory DocumentStore so no test needs a live database.
"""

from __future__ import annotations

import copy
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import pytest

# Add the invoice-hub directory to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.errors import PersistenceError  # noqa: E402
from domain.product import Product  # noqa: E402
from repositories.document_store import DocumentStore, Record  # noqa: E402


class InMemoryDocumentStore(DocumentStore):
    """
    DocumentStore kept in dictionaries, in insertion order.

    `fail(method, collection)` makes later calls of that method on that
    collection raise PersistenceError, to exercise failure paths.
    """

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Record]] = {}
        self.failures: Set[Tuple[str, str]] = set()
        self._sequence = 0

    def fail(self, method: str, collection: str) -> None:
        self.failures.add((method, collection))

    def _check(self, method: str, collection: str) -> None:
        if (method, collection) in self.failures:
            raise PersistenceError(f"simulated {method} failure on {collection}")

    def _collection(self, collection: str) -> Dict[str, Record]:
        return self.collections.setdefault(collection, {})

    def list_all(self, collection: str) -> List[Record]:
        self._check("list_all", collection)
        return [copy.deepcopy(record) for record in self._collection(collection).values()]

    def get_record(self, collection: str, record_id: str) -> Optional[Record]:
        self._check("get_record", collection)
        record = self._collection(collection).get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def create_record(self, collection: str, fields: Mapping[str, Any]) -> str:
        self._check("create_record", collection)
        self._sequence += 1
        record_id = f"{collection}-{self._sequence}"
        self._collection(collection)[record_id] = {**copy.deepcopy(dict(fields)), "id": record_id}
        return record_id

    def update_record(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        self._check("update_record", collection)
        records = self._collection(collection)
        if record_id not in records:
            raise PersistenceError(f"no {collection} record {record_id}")
        records[record_id].update(copy.deepcopy(dict(fields)))

    def delete_record(self, collection: str, record_id: str) -> None:
        self._check("delete_record", collection)
        self._collection(collection).pop(record_id, None)

    def count(self, collection: str) -> int:
        self._check("count", collection)
        return len(self._collection(collection))

    def put(self, collection: str, record: Record) -> None:
        """Insert a raw record as-is (for deserialization tests)."""
        self._collection(collection)[str(record["id"])] = copy.deepcopy(record)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


def _make_product(
    product_id: str = "p-1",
    name: str = "Widget",
    category: str = "Hardware",
    price: str = "10.00",
    tax_rate: str = "10",
    sku: str = "W-1",
) -> Product:
    return Product(
        product_id=product_id,
        name=name,
        category=category,
        sku=sku,
        price=Decimal(price),
        tax_rate=Decimal(tax_rate),
    )


@pytest.fixture
def make_product():
    """Factory for in-memory Product values (not persisted)."""

    return _make_product


@pytest.fixture
def catalog(store: InMemoryDocumentStore) -> Dict[str, Product]:
    """Two persisted products: a taxed widget and an untaxed service."""

    from repositories.product_repository import create_product

    widget = create_product(
        store, name="Widget", category="Hardware", sku="W-1",
        price=Decimal("10.00"), tax_rate=Decimal("10"),
    )
    service = create_product(
        store, name="Setup Service", category="Services", sku="S-1",
        price=Decimal("5.00"), tax_rate=Decimal("0"),
    )
    return {"widget": widget, "service": service}
