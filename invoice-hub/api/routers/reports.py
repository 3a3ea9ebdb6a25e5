"""
Reports API Endpoints.

Dashboard figures: counts, totals and monthly sales/purchases/profit.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_document_store
from api.errors import http_error_for
from api.models import SummaryResponse
from repositories.document_store import DocumentStore
from services.report_service import build_summary

router = APIRouter()


@router.get(
    "/reports/summary",
    response_model=SummaryResponse,
    summary="Business Summary",
)
def get_summary(store: DocumentStore = Depends(get_document_store)):
    try:
        summary = build_summary(store)
    except Exception as e:
        raise http_error_for(e, "build summary")
    return SummaryResponse.from_domain(summary)
