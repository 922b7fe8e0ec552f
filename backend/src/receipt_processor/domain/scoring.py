"""
Points rules for submitted receipts.

This module contains pure functions that implement the loyalty scoring.
No side effects, no I/O - just arithmetic on receipt fields.

Each rule is evaluated independently and the score is the sum of all
rule contributions:
1. One point per alphanumeric character in the retailer name
2. 50 points for a round-dollar total
3. 25 points for a total that is a multiple of 0.25
4. 5 points for every two items
5. A fifth of the item price for items whose trimmed description
   length is a multiple of 3
6. 6 points for an odd purchase day
7. 10 points for a purchase hour of 14 or 15

Design Decisions:
- Money checks use the exact integer ratio of each amount, so they hold
  for amounts of any size and never round through a Decimal context
- Unparsable dates and times score 0 for their rule instead of failing
- The time window is hour-granular: 14:00 and 15:59 both qualify
"""

import logging
from decimal import Decimal

from .models import Receipt, RuleResult

logger = logging.getLogger(__name__)


ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
QUARTERS_PER_DOLLAR = 4

POINTS_PER_ITEM_PAIR = 5

DESCRIPTION_LENGTH_MULTIPLE = 3
# Bonus is price / 5
DESCRIPTION_PRICE_DIVISOR = 5

ODD_DAY_POINTS = 6

AFTERNOON_POINTS = 10
# Exclusive hour bounds: only 14:xx and 15:xx qualify
AFTERNOON_AFTER_HOUR = 13
AFTERNOON_BEFORE_HOUR = 16


def score_retailer_name(receipt: Receipt) -> RuleResult:
    """
    One point for every alphanumeric character in the retailer name.

    Letters of any script count; digits are decimal digits only, so
    superscripts and fractions contribute nothing.
    """
    count = sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())

    return RuleResult(
        rule_name="retailer_alphanumeric",
        points=count,
        message=f"{count} alphanumeric characters in retailer name",
        details={"retailer": receipt.retailer},
    )


def score_round_dollar_total(receipt: Receipt) -> RuleResult:
    """50 points if the total has no cents."""
    _, denominator = receipt.total.as_integer_ratio()
    matched = denominator == 1

    return RuleResult(
        rule_name="round_dollar_total",
        points=ROUND_DOLLAR_POINTS if matched else 0,
        message=(
            f"Total {receipt.total} is a round dollar amount" if matched
            else f"Total {receipt.total} has cents"
        ),
        details={"total": str(receipt.total)},
    )


def score_quarter_multiple_total(receipt: Receipt) -> RuleResult:
    """25 points if the total is an exact multiple of 0.25."""
    numerator, denominator = receipt.total.as_integer_ratio()
    matched = numerator * QUARTERS_PER_DOLLAR % denominator == 0

    return RuleResult(
        rule_name="quarter_multiple_total",
        points=QUARTER_MULTIPLE_POINTS if matched else 0,
        message=(
            f"Total {receipt.total} is a multiple of 0.25" if matched
            else f"Total {receipt.total} is not a multiple of 0.25"
        ),
        details={"total": str(receipt.total)},
    )


def score_item_pairs(receipt: Receipt) -> RuleResult:
    """5 points for every two items on the receipt."""
    pairs = len(receipt.items) // 2

    return RuleResult(
        rule_name="item_pairs",
        points=pairs * POINTS_PER_ITEM_PAIR,
        message=f"{pairs} item pairs in {len(receipt.items)} items",
        details={"item_count": str(len(receipt.items))},
    )


def description_bonus(description: str, price: Decimal) -> int:
    """
    Price bonus for a single item.

    If the trimmed description length is a positive multiple of 3, the
    bonus is price * 0.2 rounded to the nearest integer, ties away from
    zero. Blank descriptions never qualify.
    """
    length = len(description.strip())
    if length == 0 or length % DESCRIPTION_LENGTH_MULTIPLE != 0:
        return 0

    # floor(price / 5 + 1/2) over the exact ratio; prices are never negative
    numerator, denominator = price.as_integer_ratio()
    divisor = DESCRIPTION_PRICE_DIVISOR * denominator
    return (2 * numerator + divisor) // (2 * divisor)


def score_item_descriptions(receipt: Receipt) -> RuleResult:
    """Sum of the description-length price bonus over all items."""
    matched: dict[str, str] = {}
    points = 0

    for index, item in enumerate(receipt.items):
        bonus = description_bonus(item.short_description, item.price)
        if bonus:
            matched[f"items[{index}]"] = str(bonus)
        points += bonus

    return RuleResult(
        rule_name="description_length",
        points=points,
        message=f"{points} points from item descriptions",
        details=matched,
    )


def score_purchase_day(receipt: Receipt) -> RuleResult:
    """6 points if the day in the purchase date is odd."""
    purchase_date = receipt.parsed_date

    if purchase_date is None:
        logger.warning(f"Failed to parse purchase date {receipt.purchase_date!r}, scoring 0")
        return RuleResult(
            rule_name="odd_purchase_day",
            points=0,
            message=f"Unparsable purchase date {receipt.purchase_date!r}",
            details={"purchase_date": receipt.purchase_date},
        )

    odd = purchase_date.day % 2 == 1

    return RuleResult(
        rule_name="odd_purchase_day",
        points=ODD_DAY_POINTS if odd else 0,
        message=f"Purchase day {purchase_date.day} is {'odd' if odd else 'even'}",
        details={"purchase_date": purchase_date.isoformat()},
    )


def score_purchase_time(receipt: Receipt) -> RuleResult:
    """
    10 points if the purchase hour is 14 or 15.

    Only the hour is compared, so 14:00 qualifies and 16:00 does not.
    """
    purchase_time = receipt.parsed_time

    if purchase_time is None:
        logger.warning(f"Failed to parse purchase time {receipt.purchase_time!r}, scoring 0")
        return RuleResult(
            rule_name="afternoon_purchase",
            points=0,
            message=f"Unparsable purchase time {receipt.purchase_time!r}",
            details={"purchase_time": receipt.purchase_time},
        )

    in_window = AFTERNOON_AFTER_HOUR < purchase_time.hour < AFTERNOON_BEFORE_HOUR

    return RuleResult(
        rule_name="afternoon_purchase",
        points=AFTERNOON_POINTS if in_window else 0,
        message=(
            f"Purchase hour {purchase_time.hour} is inside the afternoon window" if in_window
            else f"Purchase hour {purchase_time.hour} is outside the afternoon window"
        ),
        details={"purchase_time": purchase_time.strftime("%H:%M")},
    )


def score_breakdown(receipt: Receipt) -> list[RuleResult]:
    """
    Evaluate every points rule against a receipt.

    Args:
        receipt: Receipt to score

    Returns:
        One RuleResult per rule, in rule order
    """
    return [
        score_retailer_name(receipt),
        score_round_dollar_total(receipt),
        score_quarter_multiple_total(receipt),
        score_item_pairs(receipt),
        score_item_descriptions(receipt),
        score_purchase_day(receipt),
        score_purchase_time(receipt),
    ]


def score(receipt: Receipt) -> int:
    """Total points for a receipt."""
    return sum(result.points for result in score_breakdown(receipt))
