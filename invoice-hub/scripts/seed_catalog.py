"""
Create a small demo catalog for testing and demos.

Products that already exist (matched by SKU) are left untouched, so the
script can be run repeatedly.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path so we can import from repositories
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories.document_store import SupabaseDocumentStore
from repositories.product_repository import create_product, list_products


DEMO_PRODUCTS = [
    # name, category, sku, price, tax rate %
    ("Wireless Mouse", "Electronics", "EL-001", Decimal("25.00"), Decimal("18")),
    ("USB-C Cable", "Electronics", "EL-002", Decimal("9.50"), Decimal("18")),
    ("A4 Paper Ream", "Stationery", "ST-001", Decimal("6.75"), Decimal("12")),
    ("Ballpoint Pens (10)", "Stationery", "ST-002", Decimal("3.20"), Decimal("12")),
    ("Desk Lamp", "Furniture", "FU-001", Decimal("42.00"), Decimal("18")),
    ("Consulting Hour", "Services", "SV-001", Decimal("80.00"), Decimal("0")),
]


def seed_catalog():
    """Insert any demo product whose SKU is not in the catalog yet."""

    store = SupabaseDocumentStore()
    existing_skus = {product.sku for product in list_products(store)}

    created = 0
    for name, category, sku, price, tax_rate in DEMO_PRODUCTS:
        if sku in existing_skus:
            print(f"Product already exists: {sku} ({name})")
            continue

        product = create_product(store, name=name, category=category, sku=sku, price=price, tax_rate=tax_rate)
        print(f"[SUCCESS] Created {product.sku}: {product.name} @ {product.price} (tax {product.tax_rate}%)")
        created += 1

    print(f"\nCreated {created} product(s); catalog now has {len(existing_skus) + created}.")


if __name__ == "__main__":
    seed_catalog()
