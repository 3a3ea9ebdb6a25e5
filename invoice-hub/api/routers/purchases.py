"""
Purchases API Endpoints.

Recording stock purchases and listing sales history.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_document_store
from api.errors import http_error_for
from api.models import PurchaseCreateRequest, PurchaseResponse, SaleResponse
from repositories.document_store import DocumentStore
from services import purchase_service
from services.report_service import list_sales_with_invoice_numbers

router = APIRouter()


@router.get(
    "/purchases",
    response_model=List[PurchaseResponse],
    summary="List Purchases",
    description="All purchases, newest purchase date first."
)
def list_purchases(store: DocumentStore = Depends(get_document_store)):
    try:
        purchases = purchase_service.list_purchases(store)
    except Exception as e:
        raise http_error_for(e, "list purchases")
    return [PurchaseResponse.from_domain(purchase) for purchase in purchases]


@router.post(
    "/purchases",
    response_model=PurchaseResponse,
    status_code=201,
    summary="Record Purchase",
)
def record_purchase(request: PurchaseCreateRequest, store: DocumentStore = Depends(get_document_store)):
    """
    Record a purchase from a supplier.

    The product name is taken from the catalog and the total cost is
    quantity multiplied by unit price.

    **Example request:**
    ```json
    {
      "product_id": "8d0f7c2e-...",
      "quantity": "10",
      "unit_price": "12.50",
      "purchase_date": "2025-01-10",
      "supplier_name": "Global Supplies Ltd"
    }
    ```
    """
    try:
        purchase = purchase_service.record_purchase(
            store,
            purchase_service.PurchaseRequest(
                product_id=request.product_id,
                quantity=request.quantity,
                unit_price=request.unit_price,
                purchase_date=request.purchase_date,
                supplier_name=request.supplier_name,
            ),
        )
    except Exception as e:
        raise http_error_for(e, "record purchase")
    return PurchaseResponse.from_domain(purchase)


@router.get(
    "/sales",
    response_model=List[SaleResponse],
    summary="List Sales",
    description="Sale records, newest first, each with the number of the invoice it came from."
)
def list_sales(store: DocumentStore = Depends(get_document_store)):
    try:
        sales = list_sales_with_invoice_numbers(store)
    except Exception as e:
        raise http_error_for(e, "list sales")
    return [SaleResponse.from_domain(entry) for entry in sales]
