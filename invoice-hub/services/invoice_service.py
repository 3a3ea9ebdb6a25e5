"""
Invoice persistence gateway.

Handles:
- Starting a draft with a freshly allocated invoice number
- Adding catalog products to a draft
- Saving a draft: invoice record first, then the derived sale record
- Listing and fetching persisted invoices

The two writes of a save are not atomic. If the sale record cannot be
written after the invoice was, the invoice is left without a sale and
PartialWriteError reports its id so it can be reconciled.
"""

from __future__ import annotations

import logging
from typing import List

from domain.errors import NotFoundError, PartialWriteError, PersistenceError
from domain.invoice import DraftInvoice, Invoice
from domain.line_items import InvoiceLineItem
from repositories import invoice_repository
from repositories.document_store import INVOICES, PRODUCTS, DocumentStore
from repositories.product_repository import get_product
from repositories.sale_repository import record_sale
from services.invoice_number_service import next_invoice_number

logger = logging.getLogger(__name__)


def start_draft(store: DocumentStore) -> DraftInvoice:
    """New empty draft for one editing session."""

    return DraftInvoice(invoice_number=next_invoice_number(store))


def add_product_to_draft(store: DocumentStore, draft: DraftInvoice, product_id: str) -> InvoiceLineItem:
    """
    Look up a catalog product and add one unit of it to the draft.

    Raises:
        NotFoundError: if the product does not exist
    """

    product = get_product(store, product_id)
    if product is None:
        raise NotFoundError(PRODUCTS, product_id)
    return draft.items.add(product)


def save_invoice(store: DocumentStore, draft: DraftInvoice) -> str:
    """
    Persist a draft as an invoice plus its sale record.

    Process:
    1. Validate the draft (client name, at least one item)
    2. Write the invoice record; the store assigns its id
    3. Write a sale record copying the invoice total, dated now
    4. Reset the draft for the next invoice

    Args:
        store: Document store to write to
        draft: The session's draft; reset in place only on full success

    Returns:
        The store-assigned invoice id

    Raises:
        ValidationError: draft incomplete, nothing written
        PersistenceError: invoice write failed, draft preserved for retry
        PartialWriteError: invoice written but sale record failed
    """

    draft.validate()

    try:
        invoice = invoice_repository.insert_invoice(store, draft)
    except PersistenceError:
        logger.exception(
            "Failed to save invoice",
            extra={"invoice_number": draft.invoice_number},
        )
        raise

    try:
        record_sale(store, invoice.invoice_id, invoice.total_amount)
    except PersistenceError as e:
        logger.error(
            "Invoice saved without its sale record; reconciliation required",
            extra={
                "invoice_id": invoice.invoice_id,
                "invoice_number": invoice.invoice_number,
                "total_amount": str(invoice.total_amount),
                "error": str(e),
            },
        )
        raise PartialWriteError(
            f"Invoice {invoice.invoice_number} was saved but its sale record was not: {e}",
            invoice_id=invoice.invoice_id,
        ) from e

    logger.info(
        "Invoice created",
        extra={
            "invoice_id": invoice.invoice_id,
            "invoice_number": invoice.invoice_number,
            "total_amount": str(invoice.total_amount),
        },
    )

    draft.reset(next_invoice_number(store))
    return invoice.invoice_id


def list_invoices(store: DocumentStore) -> List[Invoice]:
    """All invoices, newest issue date first. Re-read from the store on every call."""

    return invoice_repository.list_invoices(store)


def get_invoice(store: DocumentStore, invoice_id: str) -> Invoice:
    """
    Raises:
        NotFoundError: if no invoice has this id
    """

    invoice = invoice_repository.get_invoice(store, invoice_id)
    if invoice is None:
        raise NotFoundError(INVOICES, invoice_id)
    return invoice


__all__ = [
    "start_draft",
    "add_product_to_draft",
    "save_invoice",
    "list_invoices",
    "get_invoice",
]
