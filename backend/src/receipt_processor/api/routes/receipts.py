"""
Receipt endpoints.

Handles receipt submission and points lookup.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from receipt_processor.api.dependencies import get_receipt_store
from receipt_processor.api.schemas import (
    ErrorResponse,
    PointsResponse,
    ProcessReceiptResponse,
    ReceiptPayload,
)
from receipt_processor.domain.scoring import score
from receipt_processor.infrastructure.store import ReceiptStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ProcessReceiptResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "The receipt is invalid"},
    },
)
def process_receipt(
    payload: ReceiptPayload,
    store: Annotated[ReceiptStore, Depends(get_receipt_store)],
) -> ProcessReceiptResponse:
    """
    Submit a receipt for processing.

    Stores the receipt and returns the identifier it can be queried by.
    """
    receipt = payload.to_domain()
    receipt_id = store.submit(receipt)

    return ProcessReceiptResponse(id=str(receipt_id))


@router.get(
    "/{receipt_id}/points",
    response_model=PointsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed receipt id"},
        404: {"model": ErrorResponse, "description": "No receipt found for that id"},
    },
)
def get_points(
    receipt_id: str,
    store: Annotated[ReceiptStore, Depends(get_receipt_store)],
) -> PointsResponse:
    """
    Return the points awarded to a stored receipt.

    Points are computed on every request; stored receipts never change,
    so repeated calls return the same value.
    """
    receipt = store.lookup(receipt_id)
    points = score(receipt)

    logger.debug(f"Receipt {receipt_id} scored {points} points")

    return PointsResponse(points=points)
