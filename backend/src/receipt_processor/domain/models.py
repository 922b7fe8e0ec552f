"""
Domain models for submitted purchase receipts.

Design Decisions:
- Frozen dataclasses so a stored receipt can never change under a reader
- Decimal for all monetary values to avoid floating-point errors
- Date and time are kept as submitted; parsing happens on demand so a
  receipt with an unreadable timestamp can still be stored and scored
- The identifier is excluded from equality: a receipt read back from the
  store compares equal to the one that was submitted
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID


DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


@dataclass(frozen=True)
class Item:
    """A single purchased item on a receipt."""
    short_description: str
    price: Decimal

    def __post_init__(self) -> None:
        """Reject negative prices."""
        if self.price < 0:
            raise ValueError(f"Item price must be non-negative, got {self.price}")


@dataclass(frozen=True)
class Receipt:
    """
    A purchase receipt as submitted by a client.

    `id` stays None until the receipt store assigns one. Binding the id
    produces a new Receipt; the submitted instance is left untouched.
    """
    retailer: str
    purchase_date: str  # YYYY-MM-DD
    purchase_time: str  # HH:MM, 24-hour
    total: Decimal
    items: tuple[Item, ...] = ()
    id: UUID | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the total and freeze the item sequence."""
        if self.total < 0:
            raise ValueError(f"Receipt total must be non-negative, got {self.total}")
        # Accept any iterable of items but always store an immutable tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def parsed_date(self) -> date | None:
        """Purchase date as a date, or None if the stored text does not parse."""
        try:
            return datetime.strptime(self.purchase_date, DATE_FORMAT).date()
        except (TypeError, ValueError):
            return None

    @property
    def parsed_time(self) -> time | None:
        """Purchase time as a time, or None if the stored text does not parse."""
        try:
            return datetime.strptime(self.purchase_time, TIME_FORMAT).time()
        except (TypeError, ValueError):
            return None


@dataclass
class RuleResult:
    """
    Points awarded by a single scoring rule.

    Mutable because results are collected incrementally while scoring.
    """
    rule_name: str
    points: int
    message: str
    details: dict[str, str] = field(default_factory=dict)
