"""
Booking Domain Events

Events that represent things that have happened in the booking ledger.
These are published after successful transaction commits.
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange, Money


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created

    The vehicle was flipped to ``booked`` in the same transaction.
    """
    customer_id: int
    vehicle_id: int
    dates: DateRange
    total_price: Money

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            customer_id=self.customer_id,
            vehicle_id=self.vehicle_id,
            rent_start_date=self.dates.start_date.isoformat(),
            rent_end_date=self.dates.end_date.isoformat(),
            total_price=str(self.total_price),
        )
        return data


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    """Event: Booking was cancelled before its start date, vehicle released"""
    customer_id: int
    vehicle_id: int


@dataclass(kw_only=True)
class BookingReturned(DomainEvent):
    """Event: Vehicle was returned, vehicle released"""
    customer_id: int
    vehicle_id: int
