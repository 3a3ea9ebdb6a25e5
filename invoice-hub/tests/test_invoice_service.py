"""
Tests for `services/invoice_service.py`.

Covers contract rules:
- save() rejects a blank client name or an empty item list without writing.
- A successful save writes exactly one invoice and one sale with the same total.
- The draft is reset with the next number only after a full success.
- A failed invoice write preserves the draft; a failed sale write reports
  PartialWriteError carrying the orphaned invoice id.
- list() is newest issue date first; get() of an unknown id raises NotFoundError.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from domain.errors import NotFoundError, PartialWriteError, PersistenceError, ValidationError
from domain.invoice import DraftInvoice, TaxMode
from repositories.document_store import INVOICES, SALES
from services import invoice_service
from services.reconciliation_service import find_orphaned_invoices, reconcile_orphaned_invoices


def _draft(store, catalog, client_name: str = "Acme Corp") -> DraftInvoice:
    draft = invoice_service.start_draft(store)
    draft.client_name = client_name
    draft.client_address = "1 Main Street\nSpringfield"
    invoice_service.add_product_to_draft(store, draft, catalog["widget"].product_id)
    invoice_service.add_product_to_draft(store, draft, catalog["widget"].product_id)
    invoice_service.add_product_to_draft(store, draft, catalog["service"].product_id)
    return draft


def test_start_draft_allocates_number(store) -> None:
    draft = invoice_service.start_draft(store)

    assert draft.invoice_number == "INV-00001"
    assert len(draft.items) == 0
    assert draft.issue_date == date.today()


def test_add_unknown_product_raises_not_found(store) -> None:
    draft = invoice_service.start_draft(store)

    with pytest.raises(NotFoundError):
        invoice_service.add_product_to_draft(store, draft, "missing")


def test_save_with_empty_client_name_is_rejected(store, catalog) -> None:
    draft = _draft(store, catalog, client_name="")

    with pytest.raises(ValidationError):
        invoice_service.save_invoice(store, draft)

    assert store.count(INVOICES) == 0
    assert store.count(SALES) == 0
    assert len(draft.items) == 2


def test_save_with_no_items_is_rejected(store) -> None:
    draft = invoice_service.start_draft(store)
    draft.client_name = "Acme Corp"

    with pytest.raises(ValidationError):
        invoice_service.save_invoice(store, draft)

    assert store.count(INVOICES) == 0


def test_successful_save_writes_one_invoice_and_one_matching_sale(store, catalog) -> None:
    """Verify the taxed scenario persists 25.00 / 2.00 / 27.00 and a 27.00 sale."""

    draft = _draft(store, catalog)
    invoice_id = invoice_service.save_invoice(store, draft)

    invoices = store.list_all(INVOICES)
    sales = store.list_all(SALES)
    assert len(invoices) == 1
    assert len(sales) == 1

    invoice = invoice_service.get_invoice(store, invoice_id)
    assert invoice.invoice_number == "INV-00001"
    assert invoice.subtotal == Decimal("25.00")
    assert invoice.tax_amount == Decimal("2.00")
    assert invoice.total_amount == Decimal("27.00")
    assert [item.quantity for item in invoice.items] == [2, 1]

    assert sales[0]["invoice_id"] == invoice_id
    assert Decimal(sales[0]["total_amount"]) == invoice.total_amount


def test_successful_save_resets_draft_with_next_number(store, catalog) -> None:
    draft = _draft(store, catalog)
    draft.tax_mode = TaxMode.UNTAXED
    draft.notes = "Thanks"

    invoice_service.save_invoice(store, draft)

    assert draft.invoice_number == "INV-00002"
    assert draft.client_name == ""
    assert draft.notes == ""
    assert len(draft.items) == 0


def test_untaxed_save_records_zero_tax(store, catalog) -> None:
    draft = _draft(store, catalog)
    draft.tax_mode = TaxMode.UNTAXED

    invoice_id = invoice_service.save_invoice(store, draft)
    invoice = invoice_service.get_invoice(store, invoice_id)

    assert invoice.tax_mode is TaxMode.UNTAXED
    assert invoice.tax_amount == 0
    assert invoice.total_amount == Decimal("25.00")


def test_failed_invoice_write_preserves_draft(store, catalog) -> None:
    draft = _draft(store, catalog)
    store.fail("create_record", INVOICES)

    with pytest.raises(PersistenceError) as excinfo:
        invoice_service.save_invoice(store, draft)

    assert not isinstance(excinfo.value, PartialWriteError)
    assert store.count(SALES) == 0
    assert draft.invoice_number == "INV-00001"
    assert draft.client_name == "Acme Corp"
    assert len(draft.items) == 2


def test_failed_sale_write_reports_partial_write(store, catalog) -> None:
    """Verify an invoice written without its sale is reported with its id."""

    draft = _draft(store, catalog)
    store.fail("create_record", SALES)

    with pytest.raises(PartialWriteError) as excinfo:
        invoice_service.save_invoice(store, draft)

    orphan_id = excinfo.value.invoice_id
    assert store.get_record(INVOICES, orphan_id) is not None
    assert store.count(SALES) == 0
    # Draft is left as it was so the user sees what happened
    assert len(draft.items) == 2

    store.failures.clear()
    assert [invoice.invoice_id for invoice in find_orphaned_invoices(store)] == [orphan_id]

    created = reconcile_orphaned_invoices(store)
    assert [sale.invoice_id for sale in created] == [orphan_id]
    assert created[0].total_amount == Decimal("27.00")
    assert find_orphaned_invoices(store) == []


def test_list_invoices_newest_issue_date_first(store, catalog) -> None:
    for issued, client in [(date(2025, 1, 5), "B"), (date(2025, 2, 1), "C"), (date(2025, 1, 5), "A")]:
        draft = _draft(store, catalog, client_name=client)
        draft.issue_date = issued
        invoice_service.save_invoice(store, draft)

    invoices = invoice_service.list_invoices(store)

    assert [invoice.client_name for invoice in invoices] == ["C", "B", "A"]


def test_get_unknown_invoice_raises_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        invoice_service.get_invoice(store, "nope")
