"""
Invoices API Endpoints.

Endpoints for building, saving, listing and exporting invoices.

The API is stateless: each request carries the whole draft, which is rebuilt
into a DraftInvoice through the same line-item rules the invoice form uses
(repeated products merge, unusable edits are ignored).
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_document_store
from api.errors import http_error_for
from api.models import (
    DraftPreviewResponse,
    InvoiceCreatedResponse,
    InvoiceDraftRequest,
    InvoiceResponse,
    LineItemResponse,
    NextInvoiceNumberResponse,
    TotalsResponse,
)
from domain.invoice import DraftInvoice, Invoice
from repositories.document_store import DocumentStore
from services import invoice_service
from services.invoice_number_service import next_invoice_number
from services.pdf_export_service import invoice_pdf_filename, render_invoice_pdf

router = APIRouter()

# Placeholder id for documents rendered from unsaved drafts
DRAFT_INVOICE_ID: str = "draft"


def _build_draft(store: DocumentStore, request: InvoiceDraftRequest) -> DraftInvoice:
    """Rebuild a session draft from a request payload."""
    draft = DraftInvoice(
        invoice_number=request.invoice_number or next_invoice_number(store),
        client_name=request.client_name,
        client_address=request.client_address,
        notes=request.notes,
        tax_mode=request.tax_mode,
    )
    if request.issue_date is not None:
        draft.issue_date = request.issue_date

    for line in request.items:
        existing = draft.items.index_of(line.product_id)
        previous_quantity = draft.items[existing].quantity if existing is not None else 0

        invoice_service.add_product_to_draft(store, draft, line.product_id)
        index = draft.items.index_of(line.product_id)

        if line.quantity is not None:
            draft.items.set_quantity(index, previous_quantity + line.quantity)
        if line.unit_price is not None:
            draft.items.set_unit_price(index, line.unit_price)
        if line.tax_rate is not None:
            draft.items.set_tax_rate(index, line.tax_rate)

    return draft


def _pdf_response(invoice: Invoice) -> Response:
    return Response(
        content=render_invoice_pdf(invoice),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={invoice_pdf_filename(invoice.invoice_number)}"
        }
    )


@router.get(
    "/invoices/next-number",
    response_model=NextInvoiceNumberResponse,
    summary="Next Invoice Number",
    description="Proposed number for a new invoice. Not reserved: concurrent sessions may be offered the same number."
)
def get_next_invoice_number(store: DocumentStore = Depends(get_document_store)):
    return NextInvoiceNumberResponse(invoice_number=next_invoice_number(store))


@router.post(
    "/invoices/preview",
    response_model=DraftPreviewResponse,
    summary="Preview Draft Totals",
)
def preview_invoice(request: InvoiceDraftRequest, store: DocumentStore = Depends(get_document_store)):
    """
    Recompute a draft without saving it.

    Returns the merged line items with their line totals and the subtotal,
    tax and total for the requested tax mode.
    """
    try:
        draft = _build_draft(store, request)
    except Exception as e:
        raise http_error_for(e, "preview invoice")

    return DraftPreviewResponse(
        invoice_number=draft.invoice_number,
        tax_mode=draft.tax_mode,
        items=[LineItemResponse.from_domain(item) for item in draft.items],
        totals=TotalsResponse.from_domain(draft.recompute()),
    )


@router.post(
    "/invoices",
    response_model=InvoiceCreatedResponse,
    status_code=201,
    summary="Save Invoice",
)
def create_invoice(request: InvoiceDraftRequest, store: DocumentStore = Depends(get_document_store)):
    """
    Save a draft as an invoice and record the matching sale.

    **Errors:**
    - 400: client name missing or no items
    - 404: a product on the draft does not exist
    - 502: the invoice was saved but its sale record was not; the detail
      carries the invoice id for reconciliation
    - 503: the invoice could not be saved; nothing was written

    **Success response:**
    ```json
    {
      "invoice_id": "c3c1...",
      "invoice_number": "INV-00042",
      "next_invoice_number": "INV-00043",
      "message": "Invoice INV-00042 has been created successfully."
    }
    ```
    """
    try:
        draft = _build_draft(store, request)
        invoice_number = draft.invoice_number
        invoice_id = invoice_service.save_invoice(store, draft)
    except Exception as e:
        raise http_error_for(e, "save invoice")

    return InvoiceCreatedResponse(
        invoice_id=invoice_id,
        invoice_number=invoice_number,
        next_invoice_number=draft.invoice_number,
        message=f"Invoice {invoice_number} has been created successfully.",
    )


@router.post(
    "/invoices/pdf",
    response_class=Response,
    summary="Download Draft PDF",
    description="Render an unsaved draft as a PDF."
)
def download_draft_pdf(request: InvoiceDraftRequest, store: DocumentStore = Depends(get_document_store)):
    try:
        draft = _build_draft(store, request)
        return _pdf_response(draft.to_invoice(DRAFT_INVOICE_ID))
    except Exception as e:
        raise http_error_for(e, "generate PDF")


@router.get(
    "/invoices",
    response_model=List[InvoiceResponse],
    summary="Invoice History",
    description="All saved invoices, newest issue date first."
)
def list_invoices(store: DocumentStore = Depends(get_document_store)):
    try:
        invoices = invoice_service.list_invoices(store)
    except Exception as e:
        raise http_error_for(e, "list invoices")
    return [InvoiceResponse.from_domain(invoice) for invoice in invoices]


@router.get(
    "/invoices/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Get Invoice",
)
def get_invoice(invoice_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        invoice = invoice_service.get_invoice(store, invoice_id)
    except Exception as e:
        raise http_error_for(e, "get invoice")
    return InvoiceResponse.from_domain(invoice)


@router.get(
    "/invoices/{invoice_id}/pdf",
    response_class=Response,
    summary="Download Invoice PDF",
    description="PDF file named `Invoice-{invoice_number}.pdf`."
)
def download_invoice_pdf(invoice_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        invoice = invoice_service.get_invoice(store, invoice_id)
        return _pdf_response(invoice)
    except Exception as e:
        raise http_error_for(e, "generate PDF")
