"""
Tests for catalog management and lookup.

Covers contract rules:
- Search is a case-insensitive substring match on name or category.
- An empty query returns nothing, not the whole catalog.
- Results keep catalog storage order.
- Product CRUD validates fields and reports unknown ids.
- Deleting a product does not change invoices that already used it.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from domain.errors import NotFoundError, ValidationError
from domain.invoice import DraftInvoice
from repositories import product_repository
from repositories.document_store import PRODUCTS
from services import invoice_service
from services.catalog_service import search_catalog, search_products


def test_search_matches_name_and_category_case_insensitively(make_product) -> None:
    products = [
        make_product(product_id="1", name="Blue Pen", category="Stationery"),
        make_product(product_id="2", name="Desk Lamp", category="Furniture"),
        make_product(product_id="3", name="Stapler", category="stationery"),
    ]

    assert [p.product_id for p in search_products(products, "STATION")] == ["1", "3"]
    assert [p.product_id for p in search_products(products, "lamp")] == ["2"]
    assert [p.product_id for p in search_products(products, "e")] == ["1", "2", "3"]


@pytest.mark.parametrize("query", ["", "   "])
def test_empty_query_returns_nothing(make_product, query) -> None:
    products = [make_product(product_id="1"), make_product(product_id="2")]

    assert search_products(products, query) == []


def test_search_catalog_reads_persisted_products(store, catalog) -> None:
    results = search_catalog(store, "serv")

    assert [p.name for p in results] == ["Setup Service"]


def test_search_catalog_empty_query_skips_store(store) -> None:
    store.fail("list_all", PRODUCTS)

    assert search_catalog(store, "") == []


def test_create_and_get_product(store) -> None:
    created = product_repository.create_product(
        store, name="Cable", category="Electronics", sku="C-1",
        price=Decimal("3.50"), tax_rate=Decimal("18"),
    )

    fetched = product_repository.get_product(store, created.product_id)

    assert fetched == created
    assert product_repository.list_products(store) == [created]


@pytest.mark.parametrize(
    "name,price,tax_rate",
    [("", "1", "0"), ("Cable", "-1", "0"), ("Cable", "1", "-5")],
)
def test_create_product_rejects_invalid_fields(store, name, price, tax_rate) -> None:
    with pytest.raises(ValidationError):
        product_repository.create_product(
            store, name=name, category="", sku="",
            price=Decimal(price), tax_rate=Decimal(tax_rate),
        )

    assert store.count(PRODUCTS) == 0


def test_update_product_applies_partial_changes(store, catalog) -> None:
    widget = catalog["widget"]

    updated = product_repository.update_product(store, widget.product_id, price=Decimal("12.00"), sku=None)

    assert updated.price == Decimal("12.00")
    assert updated.sku == widget.sku
    assert product_repository.get_product(store, widget.product_id) == updated


def test_update_product_rejects_unknown_id_and_fields(store, catalog) -> None:
    with pytest.raises(NotFoundError):
        product_repository.update_product(store, "missing", name="X")

    with pytest.raises(ValidationError):
        product_repository.update_product(store, catalog["widget"].product_id, colour="red")

    with pytest.raises(ValidationError):
        product_repository.update_product(store, catalog["widget"].product_id, price=Decimal("-1"))


def test_delete_product_keeps_existing_invoices(store, catalog) -> None:
    draft = DraftInvoice(invoice_number="INV-00001", client_name="Acme")
    invoice_service.add_product_to_draft(store, draft, catalog["widget"].product_id)
    invoice_id = invoice_service.save_invoice(store, draft)

    product_repository.delete_product(store, catalog["widget"].product_id)

    assert product_repository.get_product(store, catalog["widget"].product_id) is None
    invoice = invoice_service.get_invoice(store, invoice_id)
    assert invoice.items[0].name == "Widget"
    assert invoice.items[0].unit_price == Decimal("10.00")


def test_delete_unknown_product_raises_not_found(store) -> None:
    with pytest.raises(NotFoundError):
        product_repository.delete_product(store, "missing")
