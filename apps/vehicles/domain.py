"""
Vehicle Domain Entities

- VehicleType: Kinds of vehicles in the fleet
- AvailabilityStatus: Stored availability flag
- Vehicle: Snapshot of a vehicle row as seen by the booking ledger
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.base import Entity
from shared.domain.value_objects import Money


class VehicleType(str, Enum):
    CAR = 'car'
    BIKE = 'bike'
    VAN = 'van'
    SUV = 'SUV'


class AvailabilityStatus(str, Enum):
    """
    Stored availability flag

    Flipped eagerly by the booking ledger: ``booked`` on booking
    creation, ``available`` on cancel / return.
    """
    AVAILABLE = 'available'
    BOOKED = 'booked'


@dataclass(eq=False, kw_only=True)
class Vehicle(Entity):
    name: str
    type: VehicleType
    registration_number: str
    daily_price: Money
    availability: AvailabilityStatus = AvailabilityStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.availability == AvailabilityStatus.AVAILABLE

    def __str__(self):
        return f"{self.name} ({self.registration_number})"
