"""
Product catalog lookup.

Feeds the product picker of the invoice form. Matching is a case-insensitive
substring test against product name and category, returned in catalog order.
An empty query matches nothing rather than the whole catalog, so the picker
stays closed until the user types.
"""

from __future__ import annotations

from typing import Iterable, List

from domain.product import Product
from repositories.document_store import DocumentStore
from repositories.product_repository import list_products


def search_products(products: Iterable[Product], query: str) -> List[Product]:
    """Filter an already loaded catalog."""

    needle = query.strip()
    if not needle:
        return []
    return [product for product in products if product.matches(needle)]


def search_catalog(store: DocumentStore, query: str) -> List[Product]:
    """Search the persisted catalog. Skips the store round trip for empty queries."""

    if not query.strip():
        return []
    return search_products(list_products(store), query)


__all__ = ["search_products", "search_catalog"]
