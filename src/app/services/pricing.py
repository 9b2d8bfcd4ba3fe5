"""Rental period, reservation overlap and tier price calculations.

All functions here are pure; prices are integers in the smallest currency
unit.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Protocol

ONE_DAY = timedelta(days=1)
PREFIX_WIDTH = 8
# Minimum width; sequences past 9999 grow to five digits
SEQUENCE_WIDTH = 4


class DayTier(Protocol):
    days: int
    total_price: int


class QuantityTier(Protocol):
    quantity: int
    total_price: int


@dataclass(frozen=True)
class ItemPrice:
    """Price of one order line and the discount it received."""

    total_price: int
    savings: int
    full_price: int


def rental_days(start: date | datetime, end: date | datetime) -> int:
    """Number of billable days, partial days rounded up."""
    return math.ceil((end - start) / ONE_DAY)


def periods_overlap(
    start_a: date, end_a: date, start_b: date, end_b: date
) -> bool:
    """Inclusive interval overlap; periods touching on one day overlap."""
    return start_a <= end_b and end_a >= start_b


def calculate_item_price(
    daily_price: int,
    quantity: int,
    days: int,
    pricing_tiers: Iterable[DayTier] = (),
    quantity_pricing: Iterable[QuantityTier] = (),
) -> ItemPrice:
    """Price a line using exact-match tiers.

    One-day rentals look up a quantity tier whose ``quantity`` equals the
    requested quantity; longer rentals look up a day tier whose ``days``
    equals the rental length and multiply it by the quantity. Without an
    exact match the line is charged ``daily_price * quantity * days``.

    Args:
        daily_price: Price of one unit for one day
        quantity: Units requested
        days: Rental length in days
        pricing_tiers: Per-unit flat prices keyed by number of days
        quantity_pricing: One-day flat prices keyed by quantity

    Returns:
        ItemPrice with total, savings and the undiscounted reference price
    """
    full_price = daily_price * quantity * days

    total_price = None
    if days == 1:
        tier = next((t for t in quantity_pricing if t.quantity == quantity), None)
        if tier is not None:
            total_price = tier.total_price
    else:
        tier = next((t for t in pricing_tiers if t.days == days), None)
        if tier is not None:
            total_price = tier.total_price * quantity

    if total_price is None:
        return ItemPrice(total_price=full_price, savings=0, full_price=full_price)

    return ItemPrice(
        total_price=total_price,
        savings=full_price - total_price,
        full_price=full_price,
    )


def order_number_prefix(day: date) -> str:
    return day.strftime("%Y%m%d")


def parse_order_sequence(order_number: str | None) -> int:
    """Sequence part of an order number, 0 when there is none."""
    if not order_number:
        return 0
    return int(order_number[PREFIX_WIDTH:])


def format_order_number(day: date, sequence: int) -> str:
    return f"{order_number_prefix(day)}{sequence:0{SEQUENCE_WIDTH}d}"
