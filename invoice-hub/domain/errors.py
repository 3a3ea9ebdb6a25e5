"""
Domain: error kinds.

Every failure an operation can report to the user maps onto one of these.
Routers translate them into HTTP responses; nothing here performs I/O.
"""

from __future__ import annotations

from typing import Optional


class InvoiceHubError(Exception):
    """Base class for all reportable application errors."""


class ValidationError(InvoiceHubError):
    """Input rejected before any persisted state was touched."""


class PersistenceError(InvoiceHubError, RuntimeError):
    """The document store failed to read or write a record."""


class PartialWriteError(PersistenceError):
    """
    The invoice record was written but its sale record was not.

    The invoice is orphaned until someone reconciles it; `invoice_id`
    identifies it.
    """

    def __init__(self, message: str, invoice_id: str) -> None:
        super().__init__(message)
        self.invoice_id = invoice_id


class NotFoundError(InvoiceHubError):
    """A record requested by id does not exist."""

    def __init__(self, collection: str, record_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{collection} record not found: {record_id}")
        self.collection = collection
        self.record_id = record_id


class ExportError(InvoiceHubError):
    """Rendering an invoice document failed."""
