"""
Invoice repository (persistence).

This module provides *only* persistence operations for invoices. It does not
validate drafts or write sale records; that sequencing lives in
services/invoice_service.py.

Each invoice record serializes the whole invoice, line items included, so a
stored invoice can be displayed without consulting the catalog.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from domain.errors import PersistenceError
from domain.invoice import DraftInvoice, Invoice, TaxMode
from domain.line_items import InvoiceLineItem
from domain.money import parse_positive_int
from repositories.document_store import INVOICES, DocumentStore, Record
from repositories.records import date_field, decimal_field, require_field, text_field


def _line_item_to_fields(item: InvoiceLineItem) -> Record:
    return {
        "product_id": item.product_id,
        "name": item.name,
        "quantity": item.quantity,
        "unit_price": str(item.unit_price),
        "tax_rate": str(item.tax_rate),
        "total": str(item.line_total),
    }


def _row_to_line_item(row: Mapping[str, Any]) -> InvoiceLineItem:
    quantity = parse_positive_int(require_field(row, "quantity"))
    if quantity is None:
        raise PersistenceError(f"Malformed line item: bad quantity {row.get('quantity')!r}")

    return InvoiceLineItem(
        product_id=str(require_field(row, "product_id")),
        name=text_field(row, "name"),
        quantity=quantity,
        unit_price=decimal_field(row, "unit_price"),
        tax_rate=decimal_field(row, "tax_rate"),
    )


def _row_to_invoice(row: Mapping[str, Any]) -> Invoice:
    """Convert a store record into an Invoice."""

    raw_items = require_field(row, "items")
    if not isinstance(raw_items, list):
        raise PersistenceError(f"Malformed record {row.get('id')!r}: 'items' must be a list")

    try:
        tax_mode = TaxMode.parse(str(require_field(row, "tax_mode")))
    except ValueError as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: {e}") from e

    return Invoice(
        invoice_id=str(require_field(row, "id")),
        invoice_number=str(require_field(row, "invoice_number")),
        issue_date=date_field(row, "issue_date"),
        client_name=str(require_field(row, "client_name")),
        client_address=text_field(row, "client_address"),
        items=tuple(_row_to_line_item(item) for item in raw_items),
        subtotal=decimal_field(row, "subtotal"),
        tax_amount=decimal_field(row, "tax_amount"),
        total_amount=decimal_field(row, "total_amount"),
        tax_mode=tax_mode,
        notes=text_field(row, "notes"),
    )


def _draft_to_fields(draft: DraftInvoice) -> Record:
    totals = draft.recompute()
    return {
        "invoice_number": draft.invoice_number,
        "issue_date": draft.issue_date.isoformat(),
        "client_name": draft.client_name,
        "client_address": draft.client_address,
        "items": [_line_item_to_fields(item) for item in draft.items],
        "subtotal": str(totals.subtotal),
        "tax_amount": str(totals.tax_amount),
        "total_amount": str(totals.total_amount),
        "tax_mode": draft.tax_mode.value,
        "notes": draft.notes,
    }


def insert_invoice(store: DocumentStore, draft: DraftInvoice) -> Invoice:
    """
    Write a new invoice record from a draft.

    Returns:
        The persisted Invoice carrying the store-assigned id
    """

    invoice_id = store.create_record(INVOICES, _draft_to_fields(draft))
    return draft.to_invoice(invoice_id)


def list_invoices(store: DocumentStore) -> List[Invoice]:
    """
    All invoices, newest issue date first.

    Invoices sharing an issue date keep their storage order.
    """

    invoices = [_row_to_invoice(row) for row in store.list_all(INVOICES)]
    return sorted(invoices, key=lambda invoice: invoice.issue_date, reverse=True)


def get_invoice(store: DocumentStore, invoice_id: str) -> Optional[Invoice]:
    row = store.get_record(INVOICES, invoice_id)
    if row is None:
        return None
    return _row_to_invoice(row)


def count_invoices(store: DocumentStore) -> int:
    return store.count(INVOICES)


__all__ = [
    "insert_invoice",
    "list_invoices",
    "get_invoice",
    "count_invoices",
]
