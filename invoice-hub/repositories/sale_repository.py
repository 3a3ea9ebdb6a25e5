"""
Sale repository (persistence).

This module provides *only* persistence operations for the SaleRecord domain
entity. It does not decide when a sale is recorded (one per saved invoice);
it only inserts and fetches sale records.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.errors import PersistenceError
from domain.sale import SaleRecord
from domain.time import utc_now
from repositories.document_store import SALES, DocumentStore
from repositories.records import datetime_field, decimal_field, require_field, to_iso_utc


def _row_to_sale(row: Mapping[str, Any]) -> SaleRecord:
    """Convert a store record into a SaleRecord."""

    try:
        return SaleRecord(
            sale_id=str(require_field(row, "id")),
            invoice_id=str(require_field(row, "invoice_id")),
            total_amount=decimal_field(row, "total_amount"),
            date=datetime_field(row, "date"),
        )
    except ValueError as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: {e}") from e


def record_sale(
    store: DocumentStore,
    invoice_id: str,
    total_amount: Decimal,
    sold_at: Optional[datetime] = None,
) -> SaleRecord:
    """
    Insert a new sale record for a saved invoice.

    Args:
        invoice_id: Store id of the originating invoice
        total_amount: Copy of the invoice total
        sold_at: UTC timestamp of the sale (default: now)

    Returns:
        SaleRecord domain model with the recorded sale
    """

    sold_at = sold_at or utc_now()
    payload = {
        "invoice_id": invoice_id,
        "total_amount": str(total_amount),
        "date": to_iso_utc(sold_at, name="sold_at"),
    }

    sale_id = store.create_record(SALES, payload)
    return SaleRecord(sale_id=sale_id, invoice_id=invoice_id, total_amount=total_amount, date=sold_at)


def list_sales(store: DocumentStore) -> List[SaleRecord]:
    """All sale records, newest first."""

    sales = [_row_to_sale(row) for row in store.list_all(SALES)]
    return sorted(sales, key=lambda sale: sale.date, reverse=True)


def list_sales_by_invoice(store: DocumentStore, invoice_id: str) -> List[SaleRecord]:
    """
    Sale records derived from one invoice.

    Normally exactly one; an empty list means the invoice was orphaned by a
    partial write.
    """

    return [
        _row_to_sale(row)
        for row in store.list_all(SALES)
        if str(row.get("invoice_id")) == invoice_id
    ]


__all__ = [
    "record_sale",
    "list_sales",
    "list_sales_by_invoice",
]
