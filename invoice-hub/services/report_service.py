"""
Reporting service for sales, purchases and profit.

Read-only aggregation over the sales, purchases, invoices and products
collections. Sales are bucketed by the month the sale was recorded and
purchases by their purchase date; profit per month is sales minus purchases.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from domain.money import ZERO
from domain.sale import SaleRecord
from domain.time import month_key
from repositories.document_store import DocumentStore
from repositories.invoice_repository import list_invoices
from repositories.product_repository import list_products
from repositories.purchase_repository import list_purchases
from repositories.sale_repository import list_sales

UNKNOWN_INVOICE_NUMBER: str = "Unknown"


@dataclass(frozen=True, slots=True)
class SaleWithInvoice:
    """A sale record joined to the number of the invoice it came from."""
    sale: SaleRecord
    invoice_number: str


@dataclass(frozen=True, slots=True)
class MonthlyFigures:
    month: str  # M/YYYY
    sales: Decimal
    purchases: Decimal

    @property
    def profit(self) -> Decimal:
        return self.sales - self.purchases


@dataclass(frozen=True, slots=True)
class BusinessSummary:
    """
    Headline figures for the dashboard.

    monthly: chronological, covering every month with a sale or a purchase
    products_by_category: number of catalog products per category
    """
    product_count: int
    invoice_count: int
    total_sales: Decimal
    total_purchases: Decimal
    monthly: List[MonthlyFigures]
    products_by_category: Dict[str, int]

    @property
    def profit(self) -> Decimal:
        return self.total_sales - self.total_purchases


def list_sales_with_invoice_numbers(store: DocumentStore) -> List[SaleWithInvoice]:
    """
    Sales, newest first, each with its invoice number.

    A sale whose invoice no longer resolves reports "Unknown".
    """
    numbers = {invoice.invoice_id: invoice.invoice_number for invoice in list_invoices(store)}
    return [
        SaleWithInvoice(sale=sale, invoice_number=numbers.get(sale.invoice_id, UNKNOWN_INVOICE_NUMBER))
        for sale in list_sales(store)
    ]


def _month_sort_key(key: str) -> Tuple[int, int]:
    month, year = key.split("/")
    return int(year), int(month)


def build_summary(store: DocumentStore) -> BusinessSummary:
    """Aggregate every collection into a BusinessSummary."""
    products = list_products(store)
    invoices = list_invoices(store)
    sales = list_sales(store)
    purchases = list_purchases(store)

    sales_by_month: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for sale in sales:
        sales_by_month[month_key(sale.date.date())] += sale.total_amount

    purchases_by_month: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for purchase in purchases:
        purchases_by_month[month_key(purchase.purchase_date)] += purchase.total_cost

    months = sorted(set(sales_by_month) | set(purchases_by_month), key=_month_sort_key)
    monthly = [
        MonthlyFigures(
            month=month,
            sales=sales_by_month.get(month, ZERO),
            purchases=purchases_by_month.get(month, ZERO),
        )
        for month in months
    ]

    categories = Counter(product.category or "Uncategorized" for product in products)

    return BusinessSummary(
        product_count=len(products),
        invoice_count=len(invoices),
        total_sales=sum((sale.total_amount for sale in sales), ZERO),
        total_purchases=sum((purchase.total_cost for purchase in purchases), ZERO),
        monthly=monthly,
        products_by_category=dict(categories),
    )


__all__ = [
    "SaleWithInvoice",
    "MonthlyFigures",
    "BusinessSummary",
    "list_sales_with_invoice_numbers",
    "build_summary",
]
