"""A failure late in a booking write leaves neither the booking nor the vehicle flag changed."""

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.application.command_handlers import (
    CreateBookingCommand,
    CreateBookingHandler,
    TransitionBookingCommand,
    TransitionBookingHandler,
)
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingRepository
from apps.users.domain.policy import Actor, Role
from apps.users.models import User
from apps.users.services import DjangoCustomerDirectory
from apps.vehicles.inventory import DjangoVehicleInventory
from apps.vehicles.models import Vehicle
from shared.domain.errors import InternalError

TODAY = date(2030, 1, 1)


class BrokenStatusInventory(DjangoVehicleInventory):
    def set_status(self, vehicle_id, status):
        raise RuntimeError("availability write failed")


@pytest.fixture
def customer(db):
    return User.objects.create_user(email="fay@example.com", name="Fay", password="FayPass12")


@pytest.fixture
def vehicle(db):
    return Vehicle.objects.create(
        vehicle_name="Ford Transit",
        type=Vehicle.Type.VAN,
        registration_number="VAN-7",
        daily_rent_price=Decimal("70.00"),
    )


@pytest.mark.django_db
def test_create_rolls_back_the_insert_when_the_flag_write_fails(customer, vehicle):
    handler = CreateBookingHandler(
        inventory=BrokenStatusInventory(),
        bookings=DjangoBookingRepository(),
        customers=DjangoCustomerDirectory(),
        clock=lambda: TODAY,
    )

    with pytest.raises(InternalError) as exc_info:
        handler.handle(CreateBookingCommand(
            actor=Actor(id=customer.pk, role=Role.CUSTOMER),
            vehicle_id=vehicle.pk,
            rent_start_date="2030-02-01",
            rent_end_date="2030-02-03",
        ))

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert Booking.objects.count() == 0
    vehicle.refresh_from_db()
    assert vehicle.availability_status == Vehicle.Availability.AVAILABLE


@pytest.mark.django_db
@pytest.mark.parametrize("target,actor_role", [("cancelled", Role.CUSTOMER), ("returned", Role.ADMIN)])
def test_transition_rolls_back_the_status_when_the_flag_write_fails(customer, vehicle, target, actor_role):
    vehicle.availability_status = Vehicle.Availability.BOOKED
    vehicle.save()
    booking = Booking.objects.create(
        customer=customer,
        vehicle=vehicle,
        rent_start_date=date(2030, 2, 1),
        rent_end_date=date(2030, 2, 3),
        total_price=Decimal("210.00"),
    )
    actor_id = customer.pk if actor_role == Role.CUSTOMER else customer.pk + 1000
    handler = TransitionBookingHandler(
        inventory=BrokenStatusInventory(),
        bookings=DjangoBookingRepository(),
        clock=lambda: TODAY,
    )

    with pytest.raises(InternalError):
        handler.handle(TransitionBookingCommand(
            actor=Actor(id=actor_id, role=actor_role),
            booking_id=booking.pk,
            status=target,
        ))

    booking.refresh_from_db()
    assert booking.status == Booking.Status.ACTIVE
    vehicle.refresh_from_db()
    assert vehicle.availability_status == Vehicle.Availability.BOOKED
