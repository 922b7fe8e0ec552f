"""
Infrastructure package - In-process storage for submitted receipts.
"""

from .store import ReceiptStore

__all__ = ["ReceiptStore"]
