"""
Invoice PDF export using fpdf2.

Renders an invoice (saved or draft) to an A4 portrait PDF: letterhead,
bill-to block, item table, totals and notes. Layout fidelity is not a goal;
the document only has to carry every figure of the invoice.

Filenames follow `Invoice-{invoice_number}.pdf`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from config.settings import Settings, get_settings
from domain.errors import ExportError
from domain.invoice import Invoice, TaxMode
from domain.money import format_money

logger = logging.getLogger(__name__)


def invoice_pdf_filename(invoice_number: str) -> str:
    return f"Invoice-{invoice_number}.pdf"


def _latin1(text: str) -> str:
    """Core PDF fonts only cover latin-1; replace anything else with '?'."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


class _InvoicePdf(FPDF):
    """FPDF subclass that renders a thank-you footer on every page."""

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(120, 120, 120)
        self.cell(0, 5, "Thank you for your business!", align="C")
        self.set_text_color(0, 0, 0)


def _render_header(pdf: FPDF, invoice: Invoice, settings: Settings) -> None:
    top = pdf.get_y()

    pdf.set_font("Helvetica", "B", 22)
    pdf.set_text_color(91, 33, 182)
    pdf.cell(90, 10, "INVOICE", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(0, 0, 0)
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(90, 6, _latin1(f"#{invoice.invoice_number}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.cell(90, 6, f"Date: {invoice.issue_date.isoformat()}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    left_bottom = pdf.get_y()

    # Company letterhead, right aligned
    pdf.set_xy(110, top)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(0, 7, _latin1(settings.company_name), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 9)
    lines: List[str] = settings.company_address.splitlines() + [settings.company_email]
    for line in lines:
        if line.strip():
            pdf.set_x(110)
            pdf.cell(0, 5, _latin1(line), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_y(max(left_bottom, pdf.get_y()) + 6)


def _render_bill_to(pdf: FPDF, invoice: Invoice) -> None:
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 7, "Bill To:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(0, 6, _latin1(invoice.client_name), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    if invoice.client_address.strip():
        pdf.set_font("Helvetica", "", 10)
        pdf.multi_cell(0, 5, _latin1(invoice.client_address), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(5)


def _render_items(pdf: FPDF, invoice: Invoice) -> None:
    taxed = invoice.tax_mode is TaxMode.TAXED
    if taxed:
        headers = ["Item", "Quantity", "Unit Price", "Tax Rate", "Total"]
        widths = [74, 24, 32, 24, 36]
    else:
        headers = ["Item", "Quantity", "Unit Price", "Total"]
        widths = [98, 24, 32, 36]

    pdf.set_font("Helvetica", "B", 10)
    pdf.set_fill_color(237, 233, 254)
    for header, width in zip(headers, widths):
        pdf.cell(width, 8, header, border=1, fill=True, align="L" if header == "Item" else "R")
    pdf.ln()

    pdf.set_font("Helvetica", "", 9)
    for item in invoice.items:
        cells = [_latin1(item.name[:45]), str(item.quantity), format_money(item.unit_price)]
        if taxed:
            cells.append(f"{item.tax_rate.normalize():f}%")
        cells.append(format_money(item.line_total))

        for index, (text, width) in enumerate(zip(cells, widths)):
            pdf.cell(width, 7, text, border=1, align="L" if index == 0 else "R")
        pdf.ln()

    pdf.ln(4)


def _render_totals(pdf: FPDF, invoice: Invoice) -> None:
    rows = [
        ("Subtotal:", invoice.subtotal),
        ("Tax:", invoice.tax_amount),
    ]
    pdf.set_font("Helvetica", "", 10)
    for label, amount in rows:
        pdf.set_x(120)
        pdf.cell(40, 7, label)
        pdf.cell(30, 7, format_money(amount), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    pdf.set_x(120)
    pdf.line(120, pdf.get_y(), 190, pdf.get_y())
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(40, 9, "Total:")
    pdf.cell(30, 9, format_money(invoice.total_amount), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(6)


def _render_notes(pdf: FPDF, invoice: Invoice) -> None:
    if not invoice.notes.strip():
        return
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 7, "Notes:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", "", 10)
    pdf.multi_cell(0, 5, _latin1(invoice.notes), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def render_invoice_pdf(invoice: Invoice, settings: Optional[Settings] = None) -> bytes:
    """
    Render an invoice into PDF bytes.

    Raises:
        ExportError: if rendering fails
    """

    settings = settings or get_settings()

    try:
        pdf = _InvoicePdf(orientation="portrait", unit="mm", format="A4")
        pdf.set_title(_latin1(invoice_pdf_filename(invoice.invoice_number)))
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        _render_header(pdf, invoice, settings)
        _render_bill_to(pdf, invoice)
        _render_items(pdf, invoice)
        _render_totals(pdf, invoice)
        _render_notes(pdf, invoice)

        return bytes(pdf.output())
    except Exception as e:
        logger.exception(
            "Error generating PDF",
            extra={"invoice_number": invoice.invoice_number},
        )
        raise ExportError(f"Failed to generate PDF for invoice {invoice.invoice_number}: {e}") from e


__all__ = ["invoice_pdf_filename", "render_invoice_pdf"]
