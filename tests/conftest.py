"""Shared fixtures for the receipt processor tests."""

import json
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from receipt_processor.config import Settings
from receipt_processor.domain.models import Item, Receipt
from receipt_processor.main import create_app

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def target_receipt():
    """The Target receipt worth 26 points."""
    return Receipt(
        retailer="Target",
        purchase_date="2022-01-01",
        purchase_time="13:01",
        total=Decimal("35.35"),
        items=(
            Item("Mountain Dew 12PK", Decimal("6.49")),
            Item("Emils Cheese Pizza", Decimal("12.25")),
            Item("Knorr Creamy Chicken", Decimal("1.26")),
            Item("Doritos Nacho Cheese", Decimal("3.35")),
            Item("   Klarbrunn 12-PK 12 FL OZ  ", Decimal("12.00")),
        ),
    )


@pytest.fixture
def target_payload():
    """The Target receipt as submitted over HTTP."""
    return {
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
            {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
            {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
            {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
            {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
        ],
        "total": "35.35",
    }


@pytest.fixture
def corner_market_payload():
    """The M&M Corner Market receipt worth 109 points."""
    return json.loads((DATA_DIR / "mm_corner_market.json").read_text(encoding="utf-8"))


@pytest.fixture
def app():
    """Fresh application with an empty receipt store."""
    return create_app(Settings(debug=False, _env_file=None))


@pytest.fixture
def debug_app():
    """Fresh application with debug endpoints enabled."""
    return create_app(Settings(debug=True, _env_file=None))


@pytest.fixture
def client(app):
    """Test client for the default application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def debug_client(debug_app):
    """Test client for the debug application."""
    with TestClient(debug_app) as test_client:
        yield test_client
