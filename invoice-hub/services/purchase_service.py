"""
Purchase service for recording stock bought from suppliers.

Handles:
- Field validation (every field is required)
- Resolving the product name from the catalog
- Computing the total cost before the record is written
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Optional

from domain.errors import NotFoundError, ValidationError
from domain.money import parse_non_negative_decimal
from domain.purchase import Purchase, calculate_total_cost
from repositories import purchase_repository
from repositories.document_store import PRODUCTS, DocumentStore
from repositories.product_repository import get_product

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PurchaseRequest:
    """
    Request to record a purchase.

    quantity and unit_price may arrive as raw user input (strings); they are
    parsed during validation.
    """
    product_id: str
    quantity: Any
    unit_price: Any
    purchase_date: Optional[date]
    supplier_name: str


def record_purchase(store: DocumentStore, request: PurchaseRequest) -> Purchase:
    """
    Validate and persist a purchase.

    Args:
        store: Document store to write to
        request: PurchaseRequest with raw form values

    Returns:
        The persisted Purchase

    Raises:
        ValidationError: missing or unusable field, nothing written
        NotFoundError: product does not exist
    """
    if not request.product_id or request.purchase_date is None or not request.supplier_name.strip():
        raise ValidationError("Please fill in all fields.")

    quantity = parse_non_negative_decimal(request.quantity)
    if quantity is None or quantity == 0:
        raise ValidationError("Quantity must be a number greater than zero.")

    unit_price = parse_non_negative_decimal(request.unit_price)
    if unit_price is None:
        raise ValidationError("Unit price must be a non-negative number.")

    product = get_product(store, request.product_id)
    if product is None:
        raise NotFoundError(PRODUCTS, request.product_id)

    purchase = purchase_repository.insert_purchase(
        store,
        product_id=product.product_id,
        product_name=product.name,
        quantity=quantity,
        unit_price=unit_price,
        total_cost=calculate_total_cost(quantity, unit_price),
        purchase_date=request.purchase_date,
        supplier_name=request.supplier_name.strip(),
    )

    logger.info(
        "Purchase recorded",
        extra={
            "purchase_id": purchase.purchase_id,
            "product_id": purchase.product_id,
            "total_cost": str(purchase.total_cost),
        },
    )
    return purchase


def list_purchases(store: DocumentStore) -> List[Purchase]:
    """All purchases, newest first."""
    return purchase_repository.list_purchases(store)


__all__ = [
    "PurchaseRequest",
    "record_purchase",
    "list_purchases",
]
