"""
Products API Endpoints.

Catalog management and the search used by the invoice product picker.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import get_document_store
from api.errors import http_error_for
from api.models import ProductCreateRequest, ProductResponse, ProductUpdateRequest
from domain.errors import NotFoundError
from repositories import product_repository
from repositories.document_store import PRODUCTS, DocumentStore
from services.catalog_service import search_catalog

router = APIRouter()


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List Products",
)
def list_products(store: DocumentStore = Depends(get_document_store)):
    """All catalog products in storage order."""
    try:
        products = product_repository.list_products(store)
    except Exception as e:
        raise http_error_for(e, "list products")
    return [ProductResponse.from_domain(product) for product in products]


@router.get(
    "/products/search",
    response_model=List[ProductResponse],
    summary="Search Products",
    description="Case-insensitive match on product name or category. An empty query returns no products."
)
def search_products(
    q: str = Query("", description="Text to look for in name or category"),
    store: DocumentStore = Depends(get_document_store),
):
    try:
        products = search_catalog(store, q)
    except Exception as e:
        raise http_error_for(e, "search products")
    return [ProductResponse.from_domain(product) for product in products]


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=201,
    summary="Add Product",
)
def create_product(request: ProductCreateRequest, store: DocumentStore = Depends(get_document_store)):
    try:
        product = product_repository.create_product(
            store,
            name=request.name,
            category=request.category,
            sku=request.sku,
            price=request.price,
            tax_rate=request.tax_rate,
        )
    except Exception as e:
        raise http_error_for(e, "add product")
    return ProductResponse.from_domain(product)


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Get Product",
)
def get_product(product_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        product = product_repository.get_product(store, product_id)
        if product is None:
            raise NotFoundError(PRODUCTS, product_id)
    except Exception as e:
        raise http_error_for(e, "get product")
    return ProductResponse.from_domain(product)


@router.patch(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Update Product",
    description="Change any subset of name, category, SKU, price and tax rate. Existing invoices are not affected."
)
def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    store: DocumentStore = Depends(get_document_store),
):
    try:
        product = product_repository.update_product(
            store,
            product_id,
            **request.model_dump(exclude_none=True),
        )
    except Exception as e:
        raise http_error_for(e, "update product")
    return ProductResponse.from_domain(product)


@router.delete(
    "/products/{product_id}",
    status_code=204,
    response_class=Response,
    summary="Delete Product",
)
def delete_product(product_id: str, store: DocumentStore = Depends(get_document_store)):
    try:
        product_repository.delete_product(store, product_id)
    except Exception as e:
        raise http_error_for(e, "delete product")
    return Response(status_code=204)
