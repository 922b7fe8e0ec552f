"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from receipt_processor import __version__
from receipt_processor.api.dependencies import get_receipt_store
from receipt_processor.api.schemas import HealthResponse
from receipt_processor.infrastructure.store import ReceiptStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(
    store: Annotated[ReceiptStore, Depends(get_receipt_store)],
) -> HealthResponse:
    """Check system health and report how many receipts are held."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        receipts_stored=len(store),
    )
