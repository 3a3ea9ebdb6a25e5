"""
Product repository (persistence).

Catalog CRUD. Field rules (non-blank name, non-negative price and tax rate)
are checked by the Product entity before anything is written.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.errors import NotFoundError, PersistenceError, ValidationError
from domain.product import Product
from repositories.document_store import PRODUCTS, DocumentStore, Record
from repositories.records import decimal_field, require_field, text_field


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a store record into a Product."""

    try:
        return Product(
            product_id=str(require_field(row, "id")),
            name=str(require_field(row, "name")),
            category=text_field(row, "category"),
            sku=text_field(row, "sku"),
            price=decimal_field(row, "price"),
            tax_rate=decimal_field(row, "tax_rate"),
        )
    except ValueError as e:
        raise PersistenceError(f"Malformed record {row.get('id')!r}: {e}") from e


def _product_to_fields(product: Product) -> Record:
    return {
        "name": product.name,
        "category": product.category,
        "sku": product.sku,
        "price": str(product.price),
        "tax_rate": str(product.tax_rate),
    }


def _build_product(product_id: str, **fields: Any) -> Product:
    try:
        return Product(product_id=product_id, **fields)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def create_product(
    store: DocumentStore,
    name: str,
    category: str,
    sku: str,
    price: Decimal,
    tax_rate: Decimal,
) -> Product:
    """
    Insert a new catalog product.

    Raises:
        ValidationError: if a field breaks a product rule (nothing written)
    """

    draft = _build_product("", name=name, category=category, sku=sku, price=price, tax_rate=tax_rate)
    product_id = store.create_record(PRODUCTS, _product_to_fields(draft))
    return _build_product(product_id, name=name, category=category, sku=sku, price=price, tax_rate=tax_rate)


def list_products(store: DocumentStore) -> List[Product]:
    """All catalog products in storage order."""

    return [_row_to_product(row) for row in store.list_all(PRODUCTS)]


def get_product(store: DocumentStore, product_id: str) -> Optional[Product]:
    row = store.get_record(PRODUCTS, product_id)
    if row is None:
        return None
    return _row_to_product(row)


def update_product(store: DocumentStore, product_id: str, **changes: Any) -> Product:
    """
    Apply a partial update to an existing product.

    Only name, category, sku, price and tax_rate may be changed; keys whose
    value is None are left untouched.

    Raises:
        NotFoundError: if no product has this id
        ValidationError: if the merged product breaks a product rule
    """

    existing = get_product(store, product_id)
    if existing is None:
        raise NotFoundError(PRODUCTS, product_id)

    allowed = {"name", "category", "sku", "price", "tax_rate"}
    unknown = set(changes) - allowed
    if unknown:
        raise ValidationError(f"Unknown product fields: {sorted(unknown)}")

    merged = {
        "name": existing.name,
        "category": existing.category,
        "sku": existing.sku,
        "price": existing.price,
        "tax_rate": existing.tax_rate,
    }
    merged.update({key: value for key, value in changes.items() if value is not None})

    updated = _build_product(product_id, **merged)
    store.update_record(PRODUCTS, product_id, _product_to_fields(updated))
    return updated


def delete_product(store: DocumentStore, product_id: str) -> None:
    """
    Remove a product from the catalog.

    Past invoices keep their own copy of the product's details and are not
    affected.
    """

    if store.get_record(PRODUCTS, product_id) is None:
        raise NotFoundError(PRODUCTS, product_id)
    store.delete_record(PRODUCTS, product_id)


__all__ = [
    "create_product",
    "list_products",
    "get_product",
    "update_product",
    "delete_product",
]
