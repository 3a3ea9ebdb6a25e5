"""
Domain: stock purchases from suppliers.

Purchases have their own lifecycle, unrelated to invoices. They feed cost
figures into profit reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


def calculate_total_cost(quantity: Decimal, unit_price: Decimal) -> Decimal:
    return quantity * unit_price


@dataclass(frozen=True, slots=True)
class Purchase:
    """
    One purchase of a product from a supplier.

    total_cost is computed before submission and stored with the record.
    """

    purchase_id: str
    product_id: str
    product_name: str
    quantity: Decimal
    unit_price: Decimal
    total_cost: Decimal
    purchase_date: date
    supplier_name: str

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")
        if self.unit_price < 0:
            raise ValueError("unit_price must be >= 0")
