"""
Domain: catalog products.

A product is what a line item is created from. Line items copy the product's
name, price and tax rate when they are added, so editing or deleting a product
never changes an invoice that already exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Product:
    """
    Catalog entry available for line-item selection.

    price: unit price, non-negative
    tax_rate: percentage applied in taxed invoices (e.g. Decimal("18") for 18%)
    """

    product_id: str
    name: str
    category: str
    sku: str
    price: Decimal
    tax_rate: Decimal

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must not be blank")
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.tax_rate < 0:
            raise ValueError("tax_rate must be >= 0")

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against name or category."""

        needle = query.lower()
        return needle in self.name.lower() or needle in self.category.lower()
