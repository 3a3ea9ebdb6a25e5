"""
Tests for purchases, sales history and the business summary.

Covers contract rules:
- A purchase's total cost is quantity * unit price, computed before the write.
- Every purchase field is required; bad input writes nothing.
- Sales history joins each sale to its invoice number ("Unknown" if missing).
- Monthly figures bucket sales by sale date and purchases by purchase date.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from domain.errors import NotFoundError, ValidationError
from repositories.document_store import PURCHASES
from repositories.sale_repository import record_sale
from services import invoice_service
from services.purchase_service import PurchaseRequest, list_purchases, record_purchase
from services.report_service import build_summary, list_sales_with_invoice_numbers


def _request(**overrides) -> PurchaseRequest:
    fields = {
        "product_id": "",
        "quantity": "4",
        "unit_price": "2.25",
        "purchase_date": date(2025, 1, 10),
        "supplier_name": "Global Supplies",
    }
    fields.update(overrides)
    return PurchaseRequest(**fields)


def test_record_purchase_computes_total_cost(store, catalog) -> None:
    purchase = record_purchase(store, _request(product_id=catalog["widget"].product_id))

    assert purchase.product_name == "Widget"
    assert purchase.quantity == Decimal("4")
    assert purchase.total_cost == Decimal("9.00")
    assert list_purchases(store) == [purchase]


@pytest.mark.parametrize(
    "overrides",
    [
        {"supplier_name": "  "},
        {"purchase_date": None},
        {"product_id": ""},
        {"quantity": "0"},
        {"quantity": "abc"},
        {"unit_price": "-1"},
    ],
)
def test_record_purchase_rejects_incomplete_input(store, catalog, overrides) -> None:
    request = _request(**{"product_id": catalog["widget"].product_id, **overrides})

    with pytest.raises(ValidationError):
        record_purchase(store, request)

    assert store.count(PURCHASES) == 0


def test_record_purchase_without_product_asks_for_all_fields(store, catalog) -> None:
    with pytest.raises(ValidationError, match="Please fill in all fields."):
        record_purchase(store, _request(product_id=""))

    assert store.count(PURCHASES) == 0


def test_record_purchase_for_unknown_product(store) -> None:
    with pytest.raises(NotFoundError):
        record_purchase(store, _request(product_id="missing"))


def test_purchases_listed_newest_first(store, catalog) -> None:
    pid = catalog["widget"].product_id
    record_purchase(store, _request(product_id=pid, purchase_date=date(2025, 1, 1), supplier_name="Old"))
    record_purchase(store, _request(product_id=pid, purchase_date=date(2025, 3, 1), supplier_name="New"))

    assert [p.supplier_name for p in list_purchases(store)] == ["New", "Old"]


def test_sales_history_joins_invoice_numbers(store, catalog) -> None:
    draft = invoice_service.start_draft(store)
    draft.client_name = "Acme"
    invoice_service.add_product_to_draft(store, draft, catalog["service"].product_id)
    invoice_id = invoice_service.save_invoice(store, draft)

    record_sale(
        store, "deleted-invoice", Decimal("1.00"),
        sold_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
    )

    history = list_sales_with_invoice_numbers(store)

    assert [(entry.sale.invoice_id, entry.invoice_number) for entry in history] == [
        (invoice_id, "INV-00001"),
        ("deleted-invoice", "Unknown"),
    ]


def test_summary_aggregates_months_and_categories(store, catalog) -> None:
    record_sale(store, "i-1", Decimal("100.00"), sold_at=datetime(2025, 1, 15, tzinfo=timezone.utc))
    record_sale(store, "i-2", Decimal("50.50"), sold_at=datetime(2025, 1, 20, tzinfo=timezone.utc))
    record_sale(store, "i-3", Decimal("30.00"), sold_at=datetime(2025, 3, 2, tzinfo=timezone.utc))

    pid = catalog["widget"].product_id
    record_purchase(store, _request(product_id=pid, quantity="10", unit_price="4", purchase_date=date(2025, 1, 3)))
    record_purchase(store, _request(product_id=pid, quantity="1", unit_price="12", purchase_date=date(2024, 12, 31)))

    summary = build_summary(store)

    assert summary.product_count == 2
    assert summary.invoice_count == 0
    assert summary.total_sales == Decimal("180.50")
    assert summary.total_purchases == Decimal("52")
    assert summary.profit == Decimal("128.50")
    assert [(m.month, m.sales, m.purchases, m.profit) for m in summary.monthly] == [
        ("12/2024", Decimal("0"), Decimal("12"), Decimal("-12")),
        ("1/2025", Decimal("150.50"), Decimal("40"), Decimal("110.50")),
        ("3/2025", Decimal("30.00"), Decimal("0"), Decimal("30.00")),
    ]
    assert summary.products_by_category == {"Hardware": 1, "Services": 1}


def test_summary_of_empty_store(store) -> None:
    summary = build_summary(store)

    assert summary.total_sales == 0
    assert summary.total_purchases == 0
    assert summary.monthly == []
    assert summary.products_by_category == {}
