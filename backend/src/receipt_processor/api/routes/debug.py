"""
Debug endpoints for development and testing.

These endpoints are only registered when DEBUG=true.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from receipt_processor.api.dependencies import get_receipt_store
from receipt_processor.api.schemas import (
    ErrorResponse,
    PointsBreakdownResponse,
    RuleResultResponse,
)
from receipt_processor.config import Settings, get_settings
from receipt_processor.domain.scoring import score_breakdown
from receipt_processor.infrastructure.store import ReceiptStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/debug", tags=["debug"])


def require_debug(settings: Annotated[Settings, Depends(get_settings)]) -> None:
    """Refuse debug requests unless debug mode is on."""
    if not settings.debug:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Debug endpoints are disabled in production",
        )


@router.get(
    "/receipts/{receipt_id}/breakdown",
    response_model=PointsBreakdownResponse,
    dependencies=[Depends(require_debug)],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed receipt id"},
        404: {"model": ErrorResponse, "description": "No receipt found for that id"},
    },
)
def points_breakdown(
    receipt_id: str,
    store: Annotated[ReceiptStore, Depends(get_receipt_store)],
) -> PointsBreakdownResponse:
    """
    Explain a receipt's points rule by rule.

    Returns every rule, including those that awarded nothing.
    """
    receipt = store.lookup(receipt_id)
    results = score_breakdown(receipt)

    return PointsBreakdownResponse(
        id=str(receipt.id),
        points=sum(result.points for result in results),
        rules=[
            RuleResultResponse(
                rule_name=result.rule_name,
                points=result.points,
                message=result.message,
                details=result.details,
            )
            for result in results
        ],
    )


@router.get("/config", dependencies=[Depends(require_debug)])
def get_config(settings: Annotated[Settings, Depends(get_settings)]):
    """Get current server configuration."""
    return {
        "host": settings.host,
        "port": settings.port,
        "log_level": settings.log_level,
        "debug_mode": settings.debug,
    }
