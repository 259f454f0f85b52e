"""Deal presentation helpers.

- Discount labels ("20% OFF", "25 OFF", "FREE SHIPPING", "BOGO", "DEAL")
- Expiration countdowns in whole days
- Active / expired split for store pages

All functions are pure. The stored `is_expired` flag is authoritative: nothing
here derives expiry from `expiration_date`.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
import math
from typing import TypeVar

SECONDS_PER_DAY = 24 * 60 * 60
EXPIRING_SOON_DAYS = 3
FALLBACK_LABEL = "DEAL"


class DealType(Enum):
    """Discount kind of a deal."""

    PERCENTAGE = "PERCENTAGE"  # discount_percentage
    FIXED_AMOUNT = "FIXED_AMOUNT"  # discount_amount
    FREE_SHIPPING = "FREE_SHIPPING"
    BOGO = "BOGO"  # buy one, get one
    OTHER = "OTHER"


def _coerce_deal_type(kind: DealType | str) -> DealType | None:
    if isinstance(kind, DealType):
        return kind
    try:
        return DealType(kind)
    except ValueError:
        return None


def _format_amount(amount: Decimal | float | int | str) -> str:
    """Render an amount without trailing zeros (Decimal("25.00") -> "25")."""
    if isinstance(amount, str):
        return amount
    value = Decimal(str(amount)).normalize()
    return format(value, "f")


def format_discount_label(
    kind: DealType | str,
    percentage: int | None = None,
    amount: Decimal | float | int | str | None = None,
) -> str:
    """Build the badge label for a deal.

    A zero percentage or amount is not worth displaying, so it falls back to
    the generic label just like a missing one.

    Example:
        >>> format_discount_label(DealType.PERCENTAGE, 20)
        "20% OFF"
    """
    deal_type = _coerce_deal_type(kind)

    if deal_type is DealType.PERCENTAGE and percentage:
        return f"{percentage}% OFF"
    if deal_type is DealType.FIXED_AMOUNT and amount:
        return f"{_format_amount(amount)} OFF"
    if deal_type is DealType.FREE_SHIPPING:
        return "FREE SHIPPING"
    if deal_type is DealType.BOGO:
        return "BOGO"
    return FALLBACK_LABEL


def days_until_expiration(
    expiration: datetime | None,
    now: datetime | None = None,
) -> int | None:
    """Whole days left until `expiration`, rounded up.

    Past instants give zero or negative values. Naive datetimes are read as UTC.
    """
    if expiration is None:
        return None
    now = now or datetime.now(timezone.utc)
    if expiration.tzinfo is None:
        expiration = expiration.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.ceil((expiration - now).total_seconds() / SECONDS_PER_DAY)


def is_expiring_soon(days_left: int | None) -> bool:
    """True for deals ending within the next EXPIRING_SOON_DAYS days."""
    return days_left is not None and 0 < days_left <= EXPIRING_SOON_DAYS


DealT = TypeVar("DealT")


def split_deals(deals: Iterable[DealT]) -> tuple[list[DealT], list[DealT]]:
    """Partition deals into (active, expired), keeping their order."""
    active: list[DealT] = []
    expired: list[DealT] = []
    for deal in deals:
        (expired if deal.is_expired else active).append(deal)
    return active, expired
