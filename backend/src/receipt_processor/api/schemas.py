"""
Pydantic schemas for API request/response validation.

These schemas define the JSON contract of the receipt API.
All monetary values use strings to avoid floating point issues.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from receipt_processor.domain.models import DATE_FORMAT, TIME_FORMAT, Item, Receipt


# =============================================================================
# Request Schemas
# =============================================================================

class ItemPayload(BaseModel):
    """A single item on a submitted receipt."""
    shortDescription: str = Field(
        ...,
        description="The short product description for the item",
        examples=["Mountain Dew 12PK"],
    )
    price: str = Field(
        ...,
        description="The total price paid for this item",
        pattern=r"^\d+\.\d{2}$",
        examples=["6.49"],
    )

    def to_domain(self) -> Item:
        """Convert to the domain Item."""
        return Item(short_description=self.shortDescription, price=Decimal(self.price))


class ReceiptPayload(BaseModel):
    """Receipt submitted for processing."""
    retailer: str = Field(
        ...,
        description="The name of the retailer or store the receipt is from",
        examples=["Target"],
    )
    purchaseDate: str = Field(
        ...,
        description="The date of the purchase printed on the receipt",
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        examples=["2022-01-01"],
    )
    purchaseTime: str = Field(
        ...,
        description="The time of the purchase printed on the receipt, 24-hour",
        pattern=r"^\d{2}:\d{2}$",
        examples=["13:01"],
    )
    items: list[ItemPayload] = Field(
        ...,
        description="Items purchased, in receipt order",
    )
    total: str = Field(
        ...,
        description="The total amount paid on the receipt",
        pattern=r"^\d+\.\d{2}$",
        examples=["35.35"],
    )

    @field_validator("purchaseDate")
    @classmethod
    def check_calendar_date(cls, value: str) -> str:
        """Reject dates that match the pattern but do not exist."""
        datetime.strptime(value, DATE_FORMAT)
        return value

    @field_validator("purchaseTime")
    @classmethod
    def check_time_of_day(cls, value: str) -> str:
        """Reject times that match the pattern but do not exist."""
        datetime.strptime(value, TIME_FORMAT)
        return value

    def to_domain(self) -> Receipt:
        """Convert to the domain Receipt, without an identifier."""
        return Receipt(
            retailer=self.retailer,
            purchase_date=self.purchaseDate,
            purchase_time=self.purchaseTime,
            total=Decimal(self.total),
            items=tuple(item.to_domain() for item in self.items),
        )


# =============================================================================
# Response Schemas
# =============================================================================

class ProcessReceiptResponse(BaseModel):
    """Identifier assigned to a processed receipt."""
    id: str


class PointsResponse(BaseModel):
    """Points awarded to a receipt."""
    points: int


class RuleResultResponse(BaseModel):
    """Points from a single scoring rule."""
    rule_name: str
    points: int
    message: str
    details: dict[str, str] = {}


class PointsBreakdownResponse(BaseModel):
    """Per-rule explanation of a receipt's points."""
    id: str
    points: int
    rules: list[RuleResultResponse]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    receipts_stored: int


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str | None = None
