"""
Invoice number allocation.

Numbers are derived from the count of persisted invoices:
`INV-{count + 1}`, zero-padded to five digits.

Known limitation: count-then-format is not transactional, so two sessions
opening the invoice form at the same time receive the same number. If the
count cannot be read, a number is derived from the clock instead so invoice
creation is never blocked; that fallback is likely, but not guaranteed, to
be unique.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from repositories.document_store import DocumentStore
from repositories.invoice_repository import count_invoices

logger = logging.getLogger(__name__)

INVOICE_NUMBER_PREFIX: str = "INV-"
INVOICE_NUMBER_DIGITS: int = 5


def format_invoice_number(sequence: int) -> str:
    """Format a sequence number as `INV-00042`."""

    return f"{INVOICE_NUMBER_PREFIX}{sequence:0{INVOICE_NUMBER_DIGITS}d}"


def fallback_invoice_number(now_ms: Optional[int] = None) -> str:
    """Clock-derived number: the last five digits of the epoch in milliseconds."""

    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{INVOICE_NUMBER_PREFIX}{str(now_ms)[-INVOICE_NUMBER_DIGITS:]}"


def next_invoice_number(
    store: DocumentStore,
    clock_ms: Optional[Callable[[], int]] = None,
) -> str:
    """
    Propose the number for the next invoice.

    Never raises: store failures fall back to a clock-derived number.
    """

    try:
        count = count_invoices(store)
    except Exception as e:
        number = fallback_invoice_number(clock_ms() if clock_ms else None)
        logger.warning(
            "Invoice count unavailable, using clock-derived invoice number",
            extra={"invoice_number": number, "error": str(e)},
        )
        return number

    return format_invoice_number(count + 1)


__all__ = [
    "format_invoice_number",
    "fallback_invoice_number",
    "next_invoice_number",
]
