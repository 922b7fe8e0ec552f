"""
Request dependencies shared by the API routers.
"""

from fastapi import Request

from receipt_processor.infrastructure.store import ReceiptStore


def get_receipt_store(request: Request) -> ReceiptStore:
    """Return the receipt store owned by the running application."""
    return request.app.state.receipt_store
