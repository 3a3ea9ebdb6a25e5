"""
Domain: invoices and their totals.

Rules implemented here:
- subtotal == sum(item.line_total)
- untaxed invoices carry tax_amount == 0 regardless of item tax rates
- taxed invoices carry tax_amount == sum(item.line_total * item.tax_rate / 100)
- total_amount == subtotal + tax_amount
- an invoice must have a client name and at least one item to be saved

Totals are recomputed on demand by calling `calculate_totals` (or
`DraftInvoice.recompute`) after a mutation; nothing here observes changes.

This module contains only pure domain entities: no I/O, no database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple

from .errors import ValidationError
from .line_items import InvoiceLineItem, LineItemStore
from .money import ZERO, round_money


class TaxMode(str, Enum):
    TAXED = "taxed"
    UNTAXED = "untaxed"

    @staticmethod
    def parse(value: str) -> "TaxMode":
        """
        Resolve a stored tax mode.

        Older records used the labels "GST" / "Non-GST"; they map onto
        taxed / untaxed.
        """

        normalized = value.strip().lower()
        if normalized in ("taxed", "gst"):
            return TaxMode.TAXED
        if normalized in ("untaxed", "non-gst"):
            return TaxMode.UNTAXED
        raise ValueError(f"Unknown tax mode: {value!r}")


@dataclass(frozen=True, slots=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    def rounded(self) -> "InvoiceTotals":
        """Two-fraction-digit copy for presentation."""

        return InvoiceTotals(
            subtotal=round_money(self.subtotal),
            tax_amount=round_money(self.tax_amount),
            total_amount=round_money(self.total_amount),
        )


def calculate_totals(items: Iterable[InvoiceLineItem], tax_mode: TaxMode) -> InvoiceTotals:
    """Pure totals computation for a sequence of line items."""

    subtotal = ZERO
    tax_amount = ZERO
    for item in items:
        subtotal += item.line_total
        if tax_mode is TaxMode.TAXED:
            tax_amount += item.tax_amount

    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount,
    )


@dataclass(frozen=True, slots=True)
class Invoice:
    """
    A persisted invoice. Immutable once written; only re-read for display.

    Line items are stored as a tuple of snapshots, so the invoice cannot be
    changed through them either.
    """

    invoice_id: str
    invoice_number: str
    issue_date: date
    client_name: str
    client_address: str
    items: Tuple[InvoiceLineItem, ...]
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    tax_mode: TaxMode
    notes: str = ""

    @property
    def totals(self) -> InvoiceTotals:
        return InvoiceTotals(
            subtotal=self.subtotal,
            tax_amount=self.tax_amount,
            total_amount=self.total_amount,
        )


@dataclass(slots=True)
class DraftInvoice:
    """
    Invoice under construction for one editing session.

    The draft is passed explicitly into each operation that reads or changes
    it. After a successful save it is reset in place for the next invoice.
    """

    invoice_number: str
    issue_date: date = field(default_factory=date.today)
    client_name: str = ""
    client_address: str = ""
    notes: str = ""
    tax_mode: TaxMode = TaxMode.TAXED
    items: LineItemStore = field(default_factory=LineItemStore)

    def recompute(self) -> InvoiceTotals:
        return calculate_totals(self.items, self.tax_mode)

    def validate(self) -> None:
        """Raises ValidationError if the draft cannot be saved."""

        if not self.client_name.strip():
            raise ValidationError("Please enter client name.")
        if len(self.items) == 0:
            raise ValidationError("Please add at least one product to the invoice.")

    def to_invoice(self, invoice_id: str) -> Invoice:
        totals = self.recompute()
        snapshot = tuple(
            InvoiceLineItem(
                product_id=item.product_id,
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                tax_rate=item.tax_rate,
            )
            for item in self.items
        )
        return Invoice(
            invoice_id=invoice_id,
            invoice_number=self.invoice_number,
            issue_date=self.issue_date,
            client_name=self.client_name,
            client_address=self.client_address,
            items=snapshot,
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            total_amount=totals.total_amount,
            tax_mode=self.tax_mode,
            notes=self.notes,
        )

    def reset(self, invoice_number: str, issue_date: Optional[date] = None) -> None:
        """Discard everything and start over with a fresh invoice number."""

        self.invoice_number = invoice_number
        self.issue_date = issue_date or date.today()
        self.client_name = ""
        self.client_address = ""
        self.notes = ""
        self.items.clear()
