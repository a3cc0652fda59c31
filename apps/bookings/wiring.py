"""
Message bus wiring for the booking ledger

Handlers get their persistence capabilities here; views only know the
command and query types.
"""

from shared.application.message_bus import message_bus
from shared.application.uow import DjangoUnitOfWork

from apps.bookings.application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    TransitionBookingCommand,
    TransitionBookingHandler,
)
from apps.bookings.application.event_handlers import log_booking_created, log_vehicle_released
from apps.bookings.application.queries import ListBookingsHandler, ListBookingsQuery
from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingReturned
from apps.bookings.repositories import DjangoBookingRepository
from apps.users.services import DjangoCustomerDirectory
from apps.vehicles.inventory import DjangoVehicleInventory


def register(bus=message_bus):
    inventory = DjangoVehicleInventory()
    bookings = DjangoBookingRepository()

    create = CreateBookingHandler(
        inventory=inventory,
        bookings=bookings,
        customers=DjangoCustomerDirectory(),
        uow_factory=DjangoUnitOfWork,
    )
    transition = TransitionBookingHandler(
        inventory=inventory,
        bookings=bookings,
        uow_factory=DjangoUnitOfWork,
    )
    listing = ListBookingsHandler(bookings=bookings)

    bus.register_command_handler(CreateBookingCommand, create.handle, replace=True)
    bus.register_command_handler(TransitionBookingCommand, transition.handle, replace=True)
    bus.register_query_handler(ListBookingsQuery, listing.handle, replace=True)

    bus.register_event_handler(BookingCreated, log_booking_created)
    bus.register_event_handler(BookingCancelled, log_vehicle_released)
    bus.register_event_handler(BookingReturned, log_vehicle_released)
