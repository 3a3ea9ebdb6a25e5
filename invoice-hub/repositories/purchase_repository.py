"""
Purchase repository (persistence).

Inserts and fetches supplier purchase records. Field validation and total
cost computation happen in services/purchase_service.py.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, List, Mapping

from domain.errors import PersistenceError
from domain.purchase import Purchase
from repositories.document_store import PURCHASES, DocumentStore
from repositories.records import date_field, decimal_field, require_field, text_field


def _row_to_purchase(row: Mapping[str, Any]) -> Purchase:
    """Convert a store record into a Purchase."""

    try:
        return Purchase(
            purchase_id=str(require_field(row, "id")),
            product_id=str(require_field(row, "product_id")),
            product_name=text_field(row, "product_name"),
            quantity=decimal_field(row, "quantity"),
            unit_price=decimal_field(row, "unit_price"),
            total_cost=decimal_field(row, "total_cost"),
            purchase_date=date_field(row, "purchase_date"),
            supplier_name=text_field(row, "supplier_name"),
        )
    except ValueError as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: {e}") from e


def insert_purchase(
    store: DocumentStore,
    product_id: str,
    product_name: str,
    quantity: Decimal,
    unit_price: Decimal,
    total_cost: Decimal,
    purchase_date: date,
    supplier_name: str,
) -> Purchase:
    payload = {
        "product_id": product_id,
        "product_name": product_name,
        "quantity": str(quantity),
        "unit_price": str(unit_price),
        "total_cost": str(total_cost),
        "purchase_date": purchase_date.isoformat(),
        "supplier_name": supplier_name,
    }

    purchase_id = store.create_record(PURCHASES, payload)
    return Purchase(
        purchase_id=purchase_id,
        product_id=product_id,
        product_name=product_name,
        quantity=quantity,
        unit_price=unit_price,
        total_cost=total_cost,
        purchase_date=purchase_date,
        supplier_name=supplier_name,
    )


def list_purchases(store: DocumentStore) -> List[Purchase]:
    """All purchases, newest purchase date first."""

    purchases = [_row_to_purchase(row) for row in store.list_all(PURCHASES)]
    return sorted(purchases, key=lambda purchase: purchase.purchase_date, reverse=True)


__all__ = [
    "insert_purchase",
    "list_purchases",
]
