"""
Booking Repository

Maps Booking aggregates to the ``bookings_booking`` table. Reads used by
the list query take no locks; ``get_for_update`` is only meaningful inside
a unit of work.
"""

from __future__ import annotations

from typing import List

from django.utils import timezone  # type: ignore

from apps.vehicles.inventory import to_domain as vehicle_to_domain
from shared.domain.errors import NotFound
from shared.domain.value_objects import DateRange, Money

from .domain.entities import Booking, BookingStatus, CustomerSummary
from .domain.schedule import VehicleSchedule
from .models import Booking as BookingModel


def to_domain(model: BookingModel, with_related: bool = False) -> Booking:
    booking = Booking(
        id=model.pk,
        customer_id=model.customer_id,
        vehicle_id=model.vehicle_id,
        dates=DateRange(model.rent_start_date, model.rent_end_date),
        total_price=Money(model.total_price),
        status=BookingStatus(model.status),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
    if with_related:
        booking.vehicle = vehicle_to_domain(model.vehicle)
        booking.customer = CustomerSummary(
            id=model.customer.pk,
            name=model.customer.name,
            email=model.customer.email,
        )
    return booking


class DjangoBookingRepository:
    """Booking persistence backed by the Django ORM"""

    def _joined(self):
        return BookingModel.objects.select_related("customer", "vehicle")

    def get(self, booking_id: int) -> Booking:
        try:
            return to_domain(self._joined().get(pk=booking_id), with_related=True)
        except BookingModel.DoesNotExist:
            raise NotFound("Booking not found")

    def get_for_update(self, booking_id: int) -> Booking:
        """Re-read a booking row under an exclusive lock (SELECT ... FOR UPDATE)"""
        try:
            return to_domain(BookingModel.objects.select_for_update().get(pk=booking_id))
        except BookingModel.DoesNotExist:
            raise NotFound("Booking not found")

    def active_for_vehicle(self, vehicle_id: int) -> VehicleSchedule:
        models = BookingModel.objects.filter(
            vehicle_id=vehicle_id,
            status=BookingModel.Status.ACTIVE,
        ).order_by("rent_start_date")
        return VehicleSchedule(
            id=vehicle_id,
            vehicle_id=vehicle_id,
            bookings=[to_domain(model) for model in models],
        )

    def add(self, booking: Booking) -> Booking:
        model = BookingModel.objects.create(
            customer_id=booking.customer_id,
            vehicle_id=booking.vehicle_id,
            rent_start_date=booking.dates.start_date,
            rent_end_date=booking.dates.end_date,
            total_price=booking.total_price.amount,
            status=booking.status.value,
        )
        booking.assign_id(model.pk)
        booking.created_at = model.created_at
        booking.updated_at = model.updated_at
        return booking

    def save_status(self, booking: Booking) -> Booking:
        now = timezone.now()
        BookingModel.objects.filter(pk=booking.id).update(status=booking.status.value, updated_at=now)
        booking.updated_at = now
        return booking

    def list_all(self) -> List[Booking]:
        return [to_domain(model, with_related=True) for model in self._joined().order_by("-id")]

    def list_for_customer(self, customer_id: int) -> List[Booking]:
        queryset = self._joined().filter(customer_id=customer_id).order_by("-id")
        return [to_domain(model, with_related=True) for model in queryset]

    def has_active_for_customer(self, user_id: int) -> bool:
        return BookingModel.objects.filter(customer_id=user_id, status=BookingModel.Status.ACTIVE).exists()

    def has_active_for_vehicle(self, vehicle_id: int) -> bool:
        return BookingModel.objects.filter(vehicle_id=vehicle_id, status=BookingModel.Status.ACTIVE).exists()
