"""
Reconciliation of invoices left without a sale record.

Saving an invoice writes two records without a transaction. When the second
write (the sale) fails, the invoice exists but revenue reporting never sees
it. This service finds those invoices and, on request, writes the missing
sale records.
"""

from __future__ import annotations

import logging
from typing import List

from domain.invoice import Invoice
from domain.sale import SaleRecord
from repositories.document_store import DocumentStore
from repositories.invoice_repository import list_invoices
from repositories.sale_repository import list_sales, record_sale

logger = logging.getLogger(__name__)


def find_orphaned_invoices(store: DocumentStore) -> List[Invoice]:
    """Invoices that no sale record refers to, newest first."""

    invoiced = {sale.invoice_id for sale in list_sales(store)}
    return [invoice for invoice in list_invoices(store) if invoice.invoice_id not in invoiced]


def reconcile_orphaned_invoices(store: DocumentStore) -> List[SaleRecord]:
    """
    Write the missing sale record for every orphaned invoice.

    The sale is dated now, since the original sale time was never recorded.
    Stops at the first store failure; records written before it are kept.
    """

    created: List[SaleRecord] = []
    for invoice in find_orphaned_invoices(store):
        sale = record_sale(store, invoice.invoice_id, invoice.total_amount)
        logger.info(
            "Recorded missing sale for invoice",
            extra={
                "invoice_id": invoice.invoice_id,
                "invoice_number": invoice.invoice_number,
                "sale_id": sale.sale_id,
            },
        )
        created.append(sale)
    return created


__all__ = ["find_orphaned_invoices", "reconcile_orphaned_invoices"]
