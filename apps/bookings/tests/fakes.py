"""In-memory stand-ins for the persistence capabilities of the booking handlers."""

from __future__ import annotations

import copy
import threading
import time
from decimal import Decimal

from apps.bookings.domain.entities import Booking, BookingStatus
from apps.bookings.domain.schedule import VehicleSchedule
from apps.vehicles.domain import AvailabilityStatus, Vehicle, VehicleType
from shared.application.uow import AbstractUnitOfWork
from shared.domain.errors import NotFound
from shared.domain.value_objects import Money


def make_vehicle(vehicle_id: int = 1, price: str = "100.00") -> Vehicle:
    return Vehicle(
        id=vehicle_id,
        name=f"Vehicle {vehicle_id}",
        type=VehicleType.CAR,
        registration_number=f"REG-{vehicle_id}",
        daily_price=Money(Decimal(price)),
    )


class FakeInventory:
    def __init__(self, *vehicles: Vehicle):
        self.vehicles = {vehicle.id: vehicle for vehicle in vehicles}
        self.locked: list[int] = []

    def get(self, vehicle_id):
        try:
            return copy.copy(self.vehicles[vehicle_id])
        except KeyError:
            raise NotFound("Vehicle not found")

    def get_for_update(self, vehicle_id):
        self.locked.append(vehicle_id)
        return self.get(vehicle_id)

    def set_status(self, vehicle_id, status):
        self.vehicles[vehicle_id].availability = AvailabilityStatus(status)

    def status_of(self, vehicle_id) -> AvailabilityStatus:
        return self.vehicles[vehicle_id].availability


class FakeBookings:
    def __init__(self, overlap_check_delay: float = 0.0):
        self.rows: dict[int, Booking] = {}
        self.overlap_check_delay = overlap_check_delay
        self._next_id = 1
        self._id_lock = threading.Lock()

    def _copy(self, booking: Booking) -> Booking:
        clone = copy.copy(booking)
        clone._events = []
        return clone

    def get(self, booking_id):
        try:
            return self._copy(self.rows[booking_id])
        except KeyError:
            raise NotFound("Booking not found")

    get_for_update = get

    def active_for_vehicle(self, vehicle_id):
        bookings = [
            self._copy(booking) for booking in self.rows.values()
            if booking.vehicle_id == vehicle_id and booking.status == BookingStatus.ACTIVE
        ]
        if self.overlap_check_delay:
            # Widen the window between the overlap check and the insert
            time.sleep(self.overlap_check_delay)
        return VehicleSchedule(id=vehicle_id, vehicle_id=vehicle_id, bookings=bookings)

    def add(self, booking):
        with self._id_lock:
            booking.assign_id(self._next_id)
            self._next_id += 1
        self.rows[booking.id] = self._copy(booking)
        return booking

    def save_status(self, booking):
        self.rows[booking.id].status = booking.status
        return booking

    def list_all(self):
        return sorted((self._copy(b) for b in self.rows.values()), key=lambda b: -b.id)

    def list_for_customer(self, customer_id):
        return [b for b in self.list_all() if b.customer_id == customer_id]

    def has_active_for_customer(self, user_id):
        return any(b.customer_id == user_id and b.status == BookingStatus.ACTIVE for b in self.rows.values())

    def has_active_for_vehicle(self, vehicle_id):
        return any(b.vehicle_id == vehicle_id and b.status == BookingStatus.ACTIVE for b in self.rows.values())


class FakeCustomers:
    def __init__(self, *ids: int):
        self.ids = set(ids)

    def exists(self, user_id):
        return user_id in self.ids


class FakeUnitOfWork(AbstractUnitOfWork):
    """Records the outcome instead of talking to a database."""

    def __init__(self):
        super().__init__()
        self.committed = False
        self.rolled_back = False
        self.events = []

    def commit(self):
        self.committed = True
        self.events, self._events = self._events, []

    def rollback(self):
        self.rolled_back = True
        self._events = []


class RecordingUnitOfWorkFactory:
    """uow_factory that keeps the units of work it opened, newest last."""

    def __init__(self):
        self.opened: list[FakeUnitOfWork] = []

    def __call__(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork()
        self.opened.append(uow)
        return uow

    @property
    def last(self) -> FakeUnitOfWork:
        return self.opened[-1]


class RowLockingInventory(FakeInventory):
    """
    Emulates SELECT ... FOR UPDATE: one lock per vehicle, held by the
    calling thread until its unit of work exits.
    """

    def __init__(self, *vehicles: Vehicle):
        super().__init__(*vehicles)
        self.row_locks = {vehicle.id: threading.Lock() for vehicle in vehicles}
        self.held = threading.local()

    def get_for_update(self, vehicle_id):
        lock = self.row_locks.get(vehicle_id)
        if lock is None:
            raise NotFound("Vehicle not found")
        lock.acquire()
        self.held.lock = lock
        return super().get_for_update(vehicle_id)

    def release_held(self):
        lock = getattr(self.held, "lock", None)
        if lock is not None:
            self.held.lock = None
            lock.release()

    def uow_factory(self):
        inventory = self

        class LockReleasingUnitOfWork(FakeUnitOfWork):
            def __exit__(self, exc_type, exc_val, exc_tb):
                try:
                    return super().__exit__(exc_type, exc_val, exc_tb)
                finally:
                    inventory.release_held()

        return LockReleasingUnitOfWork()
