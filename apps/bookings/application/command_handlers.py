"""
Booking Command Handlers

These are the use cases for the booking ledger.
They orchestrate access policy checks and domain operations within
transactions.

Commands:
- CreateBookingCommand: Create a new booking for a vehicle
- TransitionBookingCommand: Cancel or return a booking
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable
import logging

from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.errors import Forbidden, InvalidInput, InvalidState, NotFound
from shared.domain.value_objects import DateRange
from apps.bookings.domain.entities import Booking, BookingStatus
from apps.users.domain.policy import (
    Actor,
    can_cancel_booking,
    can_return_booking,
    require_actor,
    resolve_booking_customer,
)
from apps.vehicles.domain import AvailabilityStatus

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    ``customer_id`` is required when an admin books on behalf of a
    customer and must be omitted (or equal to the actor) otherwise.
    Dates are ISO strings as received from the caller.
    """
    actor: Actor | None
    vehicle_id: int | None
    rent_start_date: str | date | None
    rent_end_date: str | date | None
    customer_id: int | None = None


@dataclass
class TransitionBookingCommand:
    """Command to move a booking to ``cancelled`` or ``returned``"""
    actor: Actor | None
    booking_id: int
    status: str | None


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Double booking prevention:
    1. Validate everything that needs no database access
    2. Start database transaction (unit of work)
    3. Lock the vehicle row with SELECT FOR UPDATE; concurrent creates
       for the same vehicle queue behind this lock
    4. Load the vehicle's active bookings and check for overlaps
    5. Insert the booking and flip the vehicle to ``booked``
    6. Commit; events are published after commit
    """

    REQUIRED_FIELDS = ('vehicle_id', 'rent_start_date', 'rent_end_date')

    def __init__(
        self,
        inventory,
        bookings,
        customers,
        uow_factory: Callable = DjangoUnitOfWork,
        clock: Callable[[], date] = timezone.localdate,
    ):
        self.inventory = inventory
        self.bookings = bookings
        self.customers = customers
        self.uow_factory = uow_factory
        self.clock = clock

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Handle booking creation

        Returns: Created Booking with a vehicle snapshot

        Raises:
            Unauthorized, Forbidden, InvalidInput, InvalidRange, NotFound, Conflict
        """
        customer_id = resolve_booking_customer(command.actor, command.customer_id)

        missing = [name for name in self.REQUIRED_FIELDS if getattr(command, name) in (None, '')]
        if missing:
            raise InvalidInput(
                "Missing required fields",
                errors={name: ["This field is required."] for name in missing},
            )

        dates = DateRange.parse(command.rent_start_date, command.rent_end_date)

        if command.actor.is_admin and not self.customers.exists(customer_id):
            raise NotFound("Customer not found")

        logger.info(
            f"Creating booking for vehicle {command.vehicle_id}, "
            f"customer {customer_id}, dates {dates}"
        )

        with self.uow_factory() as uow:
            # Held until commit / rollback
            vehicle = self.inventory.get_for_update(command.vehicle_id)

            schedule = self.bookings.active_for_vehicle(vehicle.id)
            schedule.ensure_available(dates)

            booking = Booking.open(customer_id, vehicle, dates)
            self.bookings.add(booking)
            self.inventory.set_status(vehicle.id, AvailabilityStatus.BOOKED)

            uow.collect_events(booking)

        vehicle.availability = AvailabilityStatus.BOOKED
        logger.info(f"Booking {booking.id} created, total price {booking.total_price}")
        return booking


class TransitionBookingHandler:
    """
    Handler for TransitionBooking command

    - ``cancelled``: admin or owner, only before the start date
    - ``returned``: admin only

    Both release the vehicle (``available``) in the same transaction as
    the status change. The vehicle row is locked before the booking row,
    the same order the create path uses.
    """

    def __init__(
        self,
        inventory,
        bookings,
        uow_factory: Callable = DjangoUnitOfWork,
        clock: Callable[[], date] = timezone.localdate,
    ):
        self.inventory = inventory
        self.bookings = bookings
        self.uow_factory = uow_factory
        self.clock = clock

    def handle(self, command: TransitionBookingCommand) -> Booking:
        actor = require_actor(command.actor)
        booking = self.bookings.get(command.booking_id)
        today = self.clock()

        target = command.status

        if target == BookingStatus.CANCELLED.value:
            if not can_cancel_booking(actor, booking.customer_id):
                raise Forbidden("You can only cancel your own bookings")
            # Checked again on the locked row by Booking.cancel
            if today >= booking.dates.start_date:
                raise InvalidState("Cancellation allowed only before start date")

            def apply(locked: Booking):
                locked.cancel(today)
        elif target == BookingStatus.RETURNED.value:
            if not can_return_booking(actor):
                raise Forbidden("Only admins can mark bookings as returned")

            def apply(locked: Booking):
                locked.mark_returned()
        else:
            raise InvalidInput("Unsupported status update")

        with self.uow_factory() as uow:
            vehicle = self.inventory.get_for_update(booking.vehicle_id)
            locked = self.bookings.get_for_update(booking.id)
            apply(locked)
            self.bookings.save_status(locked)
            self.inventory.set_status(vehicle.id, AvailabilityStatus.AVAILABLE)

            uow.collect_events(locked)

        vehicle.availability = AvailabilityStatus.AVAILABLE
        locked.vehicle = vehicle
        locked.customer = booking.customer

        logger.info(f"Booking {locked.id} {locked.status.value} by {actor.role.value} {actor.id}")
        return locked
