"""
Booking Domain Entities

Core business entities for the booking ledger:
- Booking: Aggregate representing one vehicle reservation
- BookingStatus: Lifecycle states
- CustomerSummary: Read-side snapshot of the booking customer
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from apps.vehicles.domain import Vehicle
from shared.domain.base import Aggregate
from shared.domain.errors import InvalidState
from shared.domain.value_objects import DateRange, Money


class BookingStatus(str, Enum):
    """
    Booking lifecycle

    State transitions:
    - ACTIVE -> CANCELLED (customer or admin, only before the start date)
    - ACTIVE -> RETURNED (admin, any time)

    CANCELLED and RETURNED are terminal.
    """
    ACTIVE = 'active'
    CANCELLED = 'cancelled'
    RETURNED = 'returned'


@dataclass(frozen=True)
class CustomerSummary:
    id: int
    name: str
    email: str


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    Key invariants:
    - dates is a valid inclusive range (end >= start)
    - total_price is computed once at creation and never changes
    - only ACTIVE bookings block the vehicle's dates
    """

    customer_id: int
    vehicle_id: int
    dates: DateRange
    total_price: Money
    status: BookingStatus = BookingStatus.ACTIVE

    # Read-side snapshots, filled by the repository when joined
    vehicle: Vehicle | None = None
    customer: CustomerSummary | None = None

    @classmethod
    def open(cls, customer_id: int, vehicle: Vehicle, dates: DateRange) -> 'Booking':
        """
        Create a new active booking

        Price is the vehicle's daily price at this moment times the number
        of inclusive days, rounded to cents.
        Events: BookingCreated
        """
        from apps.bookings.domain.events import BookingCreated

        booking = cls(
            customer_id=customer_id,
            vehicle_id=vehicle.id,
            dates=dates,
            total_price=(vehicle.daily_price * dates.days).rounded(),
            status=BookingStatus.ACTIVE,
            vehicle=vehicle,
        )
        booking.add_event(BookingCreated(
            customer_id=customer_id,
            vehicle_id=vehicle.id,
            dates=dates,
            total_price=booking.total_price,
        ))
        return booking

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    def cancel(self, today: date):
        """
        Cancel booking (ACTIVE -> CANCELLED)

        Allowed only strictly before the first rental day.
        Events: BookingCancelled
        """
        self._ensure_active()
        if today >= self.dates.start_date:
            raise InvalidState("Cancellation allowed only before start date")

        from apps.bookings.domain.events import BookingCancelled

        self.status = BookingStatus.CANCELLED
        self.add_event(BookingCancelled(
            aggregate_id=self.id,
            customer_id=self.customer_id,
            vehicle_id=self.vehicle_id,
        ))

    def mark_returned(self):
        """
        Vehicle returned (ACTIVE -> RETURNED)

        Events: BookingReturned
        """
        self._ensure_active()

        from apps.bookings.domain.events import BookingReturned

        self.status = BookingStatus.RETURNED
        self.add_event(BookingReturned(
            aggregate_id=self.id,
            customer_id=self.customer_id,
            vehicle_id=self.vehicle_id,
        ))

    def _ensure_active(self):
        if not self.is_active:
            raise InvalidState(f"Booking is already {self.status.value}")

    def __str__(self):
        return f"Booking #{self.id} vehicle={self.vehicle_id} {self.dates} ({self.status.value})"
