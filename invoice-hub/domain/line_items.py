"""
Domain: line items of a draft invoice.

Rules implemented here:
- Adding a product that is already on the invoice increments its quantity
  instead of adding a second row.
- line_total == quantity * unit_price at all times. Tax is never included.
- Edits with unusable input (non-numeric, negative, zero quantity) are ignored
  rather than reported, so partially typed values never interrupt the user.
- Index bounds are the caller's responsibility; remove() raises IndexError.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator, List, Optional

from .money import parse_non_negative_decimal, parse_positive_int
from .product import Product


@dataclass(slots=True)
class InvoiceLineItem:
    """One product entry with its own quantity, price and tax snapshot."""

    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    tax_rate: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def tax_amount(self) -> Decimal:
        return self.line_total * self.tax_rate / 100

    @classmethod
    def from_product(cls, product: Product) -> "InvoiceLineItem":
        return cls(
            product_id=product.product_id,
            name=product.name,
            quantity=1,
            unit_price=product.price,
            tax_rate=product.tax_rate,
        )


class LineItemStore:
    """
    Ordered line items for exactly one draft invoice.

    Not safe for concurrent mutation; a store belongs to one editing session.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[List[InvoiceLineItem]] = None) -> None:
        self._items: List[InvoiceLineItem] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InvoiceLineItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> InvoiceLineItem:
        return self._items[index]

    @property
    def items(self) -> List[InvoiceLineItem]:
        """Snapshot copy; mutating the returned list does not affect the store."""

        return list(self._items)

    def index_of(self, product_id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.product_id == product_id:
                return index
        return None

    def add(self, product: Product) -> InvoiceLineItem:
        """Add one unit of `product`, merging into an existing row if present."""

        index = self.index_of(product.product_id)
        if index is not None:
            item = self._items[index]
            item.quantity += 1
            return item

        item = InvoiceLineItem.from_product(product)
        self._items.append(item)
        return item

    def set_quantity(self, index: int, value: Any) -> bool:
        """Returns False (and changes nothing) when value is not a positive integer."""

        quantity = parse_positive_int(value)
        if quantity is None:
            return False
        self._items[index].quantity = quantity
        return True

    def set_unit_price(self, index: int, value: Any) -> bool:
        price = parse_non_negative_decimal(value)
        if price is None:
            return False
        self._items[index].unit_price = price
        return True

    def set_tax_rate(self, index: int, value: Any) -> bool:
        rate = parse_non_negative_decimal(value)
        if rate is None:
            return False
        self._items[index].tax_rate = rate
        return True

    def remove(self, index: int) -> InvoiceLineItem:
        if not 0 <= index < len(self._items):
            raise IndexError(f"line item index out of range: {index}")
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()
