"""
Database validation tests.

This module tests the Supabase connection and verifies that:
1. Connection credentials work
2. Required tables exist
3. Basic CRUD operations work through the repositories

These tests talk to a real Supabase project and are skipped unless
SUPABASE_URL and SUPABASE_KEY are set (directly or via invoice-hub/.env).
Run them first to validate database setup before using the API.
"""

from __future__ import annotations

import os
import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file before anything else
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Add parent directory to path to import repositories
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

pytestmark = pytest.mark.skipif(
    not (os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_KEY")),
    reason="SUPABASE_URL / SUPABASE_KEY not configured",
)

TABLES = ["products", "invoices", "sales", "purchases"]


@pytest.fixture(scope="module")
def live_store():
    from repositories.document_store import SupabaseDocumentStore

    return SupabaseDocumentStore()


def test_environment_variables_look_valid() -> None:
    """Verify SUPABASE_URL points at an https endpoint."""

    assert os.getenv("SUPABASE_URL", "").startswith("https://"), "SUPABASE_URL should start with https://"


@pytest.mark.parametrize("table", TABLES)
def test_table_exists(live_store, table: str) -> None:
    """Verify each collection can be counted."""

    assert live_store.count(table) >= 0


def test_product_repository_basic_operations(live_store) -> None:
    """Create, read, update and delete a product through the repository."""

    from repositories import product_repository

    product = product_repository.create_product(
        live_store, name="Validation Widget", category="Test", sku="VAL-1",
        price=Decimal("1.50"), tax_rate=Decimal("5"),
    )
    try:
        fetched = product_repository.get_product(live_store, product.product_id)
        assert fetched == product

        updated = product_repository.update_product(live_store, product.product_id, price=Decimal("2.00"))
        assert updated.price == Decimal("2.00")
    finally:
        product_repository.delete_product(live_store, product.product_id)

    assert product_repository.get_product(live_store, product.product_id) is None


def test_invoice_and_sale_round_trip(live_store) -> None:
    """Persist an invoice and its sale, read both back, then clean up."""

    from domain.invoice import DraftInvoice
    from repositories import invoice_repository, sale_repository
    from repositories.document_store import INVOICES, SALES

    draft = DraftInvoice(invoice_number="INV-VALIDATION", client_name="Validation Client")
    draft.items.add(_validation_product())

    invoice = invoice_repository.insert_invoice(live_store, draft)
    sale = None
    try:
        sale = sale_repository.record_sale(
            live_store, invoice.invoice_id, invoice.total_amount,
            sold_at=datetime(2025, 1, 2, 12, 0, 0, tzinfo=timezone.utc),
        )

        fetched = invoice_repository.get_invoice(live_store, invoice.invoice_id)
        assert fetched is not None
        assert fetched.total_amount == invoice.total_amount

        sales = sale_repository.list_sales_by_invoice(live_store, invoice.invoice_id)
        assert [s.sale_id for s in sales] == [sale.sale_id]
    finally:
        if sale is not None:
            live_store.delete_record(SALES, sale.sale_id)
        live_store.delete_record(INVOICES, invoice.invoice_id)


def test_purchase_repository_basic_operations(live_store) -> None:
    from repositories import purchase_repository
    from repositories.document_store import PURCHASES

    purchase = purchase_repository.insert_purchase(
        live_store,
        product_id="validation-product",
        product_name="Validation Widget",
        quantity=Decimal("2"),
        unit_price=Decimal("1.25"),
        total_cost=Decimal("2.50"),
        purchase_date=date(2025, 1, 1),
        supplier_name="Validation Supplier",
    )
    try:
        ids = [p.purchase_id for p in purchase_repository.list_purchases(live_store)]
        assert purchase.purchase_id in ids
    finally:
        live_store.delete_record(PURCHASES, purchase.purchase_id)


def _validation_product():
    from domain.product import Product

    return Product(
        product_id="validation-product",
        name="Validation Widget",
        category="Test",
        sku="VAL-1",
        price=Decimal("1.50"),
        tax_rate=Decimal("5"),
    )
