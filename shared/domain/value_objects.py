"""
Common Value Objects

Value objects used across the vehicle and booking domains:
- Money: Represents a non-negative monetary amount
- DateRange: Represents an inclusive range of calendar days

The module level helpers (parse_date, inclusive_days, overlaps) are the
date primitives the booking ledger is built on.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from shared.domain.base import ValueObject
from shared.domain.errors import InvalidInput, InvalidRange

ISO_DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

CENT = Decimal('0.01')


def parse_date(value) -> date:
    """
    Parse an ISO calendar date (YYYY-MM-DD)

    Accepts ``date`` instances as-is. Anything else, including well formed
    strings naming a day that does not exist (2024-02-30), raises InvalidInput.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
        raise InvalidInput("Invalid date format; use ISO YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidInput(f"Invalid calendar date: {value}")


def inclusive_days(start: date, end: date) -> int:
    """
    Number of calendar days covered by [start, end], both ends included

    2024-01-15 .. 2024-01-20 is 6 days. A single-day range is 1.
    """
    if end < start:
        raise InvalidRange("rent_end_date must be after or equal to rent_start_date")
    return (end - start).days + 1


def overlaps(existing_start: date, existing_end: date, new_start: date, new_end: date) -> bool:
    """
    True when the two inclusive ranges share at least one day

    Ranges that touch (one ends the day the other starts) overlap:
    same-day handoff of a vehicle is not allowed.
    """
    return not (existing_end < new_start or existing_start > new_end)


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Non-negative decimal amount. Prices are stored and serialized with
    two fractional digits.
    """
    amount: Decimal

    def __post_init__(self):
        try:
            amount = Decimal(str(self.amount))
        except InvalidOperation:
            raise InvalidInput(f"Invalid amount: {self.amount!r}")
        if not amount.is_finite():
            raise InvalidInput(f"Invalid amount: {self.amount!r}")
        if amount < 0:
            raise InvalidInput("Amount cannot be negative")
        object.__setattr__(self, 'amount', amount)

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        return Money(self.amount + other.amount)

    def __mul__(self, factor) -> 'Money':
        """Multiply money by a number (e.g. a day count)"""
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * factor)

    __rmul__ = __mul__

    def rounded(self) -> 'Money':
        """Round to cents, half up"""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP))

    def __str__(self):
        return f"{self.amount.quantize(CENT, rounding=ROUND_HALF_UP)}"

    def __repr__(self):
        return f"Money({self.amount})"


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date to end_date, both inclusive.
    A range may be a single day (start_date == end_date).
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidRange("rent_end_date must be after or equal to rent_start_date")

    @classmethod
    def parse(cls, start, end) -> 'DateRange':
        """
        Build a range from two ISO date strings

        Raises InvalidInput for unparsable dates and InvalidRange when
        the end is before the start.
        """
        return cls(parse_date(start), parse_date(end))

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range shares at least one day with another

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> True (touching)
            - DateRange(25, 28) overlaps with DateRange(29, 31) -> False
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")
        return overlaps(self.start_date, self.end_date, other.start_date, other.end_date)

    def contains(self, check_date: date) -> bool:
        return self.start_date <= check_date <= self.end_date

    @property
    def days(self) -> int:
        """Number of rental days (inclusive)"""
        return inclusive_days(self.start_date, self.end_date)

    def __len__(self) -> int:
        return self.days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
