"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Monetary values are serialized as strings rounded to two decimal places.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.invoice import Invoice, InvoiceTotals, TaxMode
from domain.line_items import InvoiceLineItem
from domain.money import round_money
from domain.product import Product
from domain.purchase import Purchase
from services.report_service import BusinessSummary, SaleWithInvoice


# ============================================================================
# Product Models
# ============================================================================

class ProductCreateRequest(BaseModel):
    """Request to add a product to the catalog."""
    name: str = Field(..., min_length=1)
    category: str = ""
    sku: str = ""
    price: Decimal = Field(..., ge=0)
    tax_rate: Decimal = Field(Decimal("0"), ge=0, description="Tax rate percentage")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Wireless Mouse",
                "category": "Electronics",
                "sku": "WM-001",
                "price": "25.00",
                "tax_rate": "18"
            }
        }


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    tax_rate: Optional[Decimal] = Field(None, ge=0)


class ProductResponse(BaseModel):
    product_id: str
    name: str
    category: str
    sku: str
    price: Decimal
    tax_rate: Decimal

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            product_id=product.product_id,
            name=product.name,
            category=product.category,
            sku=product.sku,
            price=round_money(product.price),
            tax_rate=product.tax_rate,
        )


# ============================================================================
# Invoice Models
# ============================================================================

class DraftLineItemRequest(BaseModel):
    """
    One catalog product on a draft.

    Adding the same product twice merges into one row. Omitted quantity means
    one unit; omitted price and tax rate are copied from the catalog.
    """
    product_id: str
    quantity: Optional[int] = Field(None, ge=1)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    tax_rate: Optional[Decimal] = Field(None, ge=0)


class InvoiceDraftRequest(BaseModel):
    """Draft invoice submitted for preview, export or saving."""
    invoice_number: Optional[str] = Field(
        None,
        description="Leave empty to allocate the next sequential number"
    )
    issue_date: Optional[date] = None
    client_name: str = ""
    client_address: str = ""
    notes: str = ""
    tax_mode: TaxMode = TaxMode.TAXED
    items: List[DraftLineItemRequest] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "issue_date": "2025-01-15",
                "client_name": "Acme Corp",
                "client_address": "1 Main Street\nSpringfield",
                "tax_mode": "taxed",
                "items": [
                    {"product_id": "8d0f...", "quantity": 2},
                    {"product_id": "1a2b...", "unit_price": "5.00", "tax_rate": "0"}
                ],
                "notes": "Payment due within 30 days"
            }
        }


class LineItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal

    @classmethod
    def from_domain(cls, item: InvoiceLineItem) -> "LineItemResponse":
        return cls(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            unit_price=round_money(item.unit_price),
            tax_rate=item.tax_rate,
            line_total=round_money(item.line_total),
        )


class TotalsResponse(BaseModel):
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal

    @classmethod
    def from_domain(cls, totals: InvoiceTotals) -> "TotalsResponse":
        rounded = totals.rounded()
        return cls(
            subtotal=rounded.subtotal,
            tax_amount=rounded.tax_amount,
            total_amount=rounded.total_amount,
        )


class DraftPreviewResponse(BaseModel):
    """Recomputed draft: proposed number, merged items and totals."""
    invoice_number: str
    tax_mode: TaxMode
    items: List[LineItemResponse]
    totals: TotalsResponse


class InvoiceResponse(BaseModel):
    invoice_id: str
    invoice_number: str
    issue_date: date
    client_name: str
    client_address: str
    items: List[LineItemResponse]
    totals: TotalsResponse
    tax_mode: TaxMode
    notes: str

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            invoice_id=invoice.invoice_id,
            invoice_number=invoice.invoice_number,
            issue_date=invoice.issue_date,
            client_name=invoice.client_name,
            client_address=invoice.client_address,
            items=[LineItemResponse.from_domain(item) for item in invoice.items],
            totals=TotalsResponse.from_domain(invoice.totals),
            tax_mode=invoice.tax_mode,
            notes=invoice.notes,
        )


class InvoiceCreatedResponse(BaseModel):
    invoice_id: str
    invoice_number: str
    next_invoice_number: str
    message: str


class NextInvoiceNumberResponse(BaseModel):
    invoice_number: str


# ============================================================================
# Purchase and Sale Models
# ============================================================================

class PurchaseCreateRequest(BaseModel):
    """Request to record a purchase from a supplier."""
    product_id: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)
    purchase_date: date
    supplier_name: str = Field(..., min_length=1)


class PurchaseResponse(BaseModel):
    purchase_id: str
    product_id: str
    product_name: str
    quantity: Decimal
    unit_price: Decimal
    total_cost: Decimal
    purchase_date: date
    supplier_name: str

    @classmethod
    def from_domain(cls, purchase: Purchase) -> "PurchaseResponse":
        return cls(
            purchase_id=purchase.purchase_id,
            product_id=purchase.product_id,
            product_name=purchase.product_name,
            quantity=purchase.quantity,
            unit_price=round_money(purchase.unit_price),
            total_cost=round_money(purchase.total_cost),
            purchase_date=purchase.purchase_date,
            supplier_name=purchase.supplier_name,
        )


class SaleResponse(BaseModel):
    sale_id: str
    invoice_id: str
    invoice_number: str
    total_amount: Decimal
    date: datetime

    @classmethod
    def from_domain(cls, entry: SaleWithInvoice) -> "SaleResponse":
        return cls(
            sale_id=entry.sale.sale_id,
            invoice_id=entry.sale.invoice_id,
            invoice_number=entry.invoice_number,
            total_amount=round_money(entry.sale.total_amount),
            date=entry.sale.date,
        )


# ============================================================================
# Report Models
# ============================================================================

class MonthlyFiguresResponse(BaseModel):
    month: str
    sales: Decimal
    purchases: Decimal
    profit: Decimal


class SummaryResponse(BaseModel):
    product_count: int
    invoice_count: int
    total_sales: Decimal
    total_purchases: Decimal
    profit: Decimal
    monthly: List[MonthlyFiguresResponse]
    products_by_category: Dict[str, int]

    @classmethod
    def from_domain(cls, summary: BusinessSummary) -> "SummaryResponse":
        return cls(
            product_count=summary.product_count,
            invoice_count=summary.invoice_count,
            total_sales=round_money(summary.total_sales),
            total_purchases=round_money(summary.total_purchases),
            profit=round_money(summary.profit),
            monthly=[
                MonthlyFiguresResponse(
                    month=figures.month,
                    sales=round_money(figures.sales),
                    purchases=round_money(figures.purchases),
                    profit=round_money(figures.profit),
                )
                for figures in summary.monthly
            ],
            products_by_category=summary.products_by_category,
        )

