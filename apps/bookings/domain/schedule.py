"""
Vehicle Schedule Aggregate

The consistency boundary for preventing double bookings of one vehicle.
It is loaded from the active bookings of a vehicle whose row is locked by
the surrounding unit of work, so no other writer can change the schedule
between the overlap check and the insert.
"""

from dataclasses import dataclass, field
from typing import List

from shared.domain.base import Aggregate
from shared.domain.errors import Conflict
from shared.domain.value_objects import DateRange

from apps.bookings.domain.entities import Booking

NOT_AVAILABLE = "Vehicle is not available for the selected dates"


@dataclass(eq=False, kw_only=True)
class VehicleSchedule(Aggregate):
    """
    Active bookings of a single vehicle

    Key invariant: active bookings have pairwise non-overlapping inclusive
    date ranges (touching ranges count as overlapping).

    Usage:
        with DjangoUnitOfWork():
            vehicle = inventory.get_for_update(vehicle_id)
            schedule = booking_repo.active_for_vehicle(vehicle_id)
            schedule.ensure_available(dates)
            ...
    """

    vehicle_id: int
    bookings: List[Booking] = field(default_factory=list)

    def overlapping(self, dates: DateRange) -> List[Booking]:
        """Active bookings sharing at least one day with ``dates``"""
        return [
            booking for booking in self.bookings
            if booking.is_active and booking.dates.overlaps_with(dates)
        ]

    def can_book(self, dates: DateRange) -> bool:
        return not self.overlapping(dates)

    def ensure_available(self, dates: DateRange):
        """Raise Conflict when any active booking overlaps ``dates``"""
        clashes = self.overlapping(dates)
        if clashes:
            raise Conflict(
                NOT_AVAILABLE,
                errors={"overlapping_booking_ids": [booking.id for booking in clashes]},
            )

    def __str__(self):
        return f"VehicleSchedule(vehicle={self.vehicle_id}, active={len(self.bookings)})"
