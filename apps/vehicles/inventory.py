"""
Vehicle Inventory

Persistence capability over the vehicle table, injected into the booking
handlers. ``get_for_update`` is the row lock every booking write path
serializes on; it only holds when called inside a unit of work.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from django.db import IntegrityError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.errors import Conflict, InvalidInput, NotFound
from shared.domain.value_objects import Money

from .domain import AvailabilityStatus, Vehicle, VehicleType
from .filters import VehicleFilterSet
from .models import Vehicle as VehicleModel

logger = logging.getLogger(__name__)

DUPLICATE_REGISTRATION = "Registration number already exists"

# Wire / model field names accepted by create and update
WRITABLE_FIELDS = ("vehicle_name", "type", "registration_number", "daily_rent_price", "availability_status")


def to_domain(model: VehicleModel) -> Vehicle:
    return Vehicle(
        id=model.pk,
        name=model.vehicle_name,
        type=VehicleType(model.type),
        registration_number=model.registration_number,
        daily_price=Money(model.daily_rent_price),
        availability=AvailabilityStatus(model.availability_status),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class DjangoVehicleInventory:
    """Vehicle inventory backed by the Django ORM"""

    def __init__(self, uow_factory=DjangoUnitOfWork):
        self.uow_factory = uow_factory

    def get(self, vehicle_id: int) -> Vehicle:
        return to_domain(self._fetch(vehicle_id))

    def get_for_update(self, vehicle_id: int) -> Vehicle:
        """
        Load a vehicle and lock its row (SELECT ... FOR UPDATE)

        The lock is held until the enclosing transaction ends. Concurrent
        writers for the same vehicle queue here; different vehicles never
        contend.
        """
        return to_domain(self._fetch(vehicle_id, lock=True))

    def set_status(self, vehicle_id: int, status: AvailabilityStatus) -> None:
        """Unconditional write of the stored availability flag"""
        status = AvailabilityStatus(status)
        VehicleModel.objects.filter(pk=vehicle_id).update(
            availability_status=status.value,
            updated_at=timezone.now(),
        )

    def list(self, filters: Mapping[str, Any] | None = None) -> List[Vehicle]:
        queryset = VehicleModel.objects.order_by("id")
        if filters:
            filterset = VehicleFilterSet(filters, queryset=queryset)
            if not filterset.is_valid():
                errors = {
                    field: [error["message"] for error in field_errors]
                    for field, field_errors in filterset.errors.get_json_data().items()
                }
                raise InvalidInput("Invalid filter", errors=errors)
            queryset = filterset.qs
        return [to_domain(model) for model in queryset]

    def create(self, data: Mapping[str, Any]) -> Vehicle:
        model = VehicleModel(**self._writable(data))
        try:
            with transaction.atomic():
                model.save()
        except IntegrityError:
            raise Conflict(DUPLICATE_REGISTRATION)
        logger.info(f"Vehicle {model.pk} created ({model.registration_number})")
        return to_domain(model)

    def update(self, vehicle_id: int, data: Mapping[str, Any]) -> Vehicle:
        """
        Write only the given columns, under the vehicle row lock

        A booking committed by another transaction may have flipped
        ``availability_status`` since the caller last read the vehicle; an
        update that does not name the flag leaves it as stored.
        """
        changes = self._writable(data)
        with self.uow_factory():
            model = self._fetch(vehicle_id, lock=True)
            for field, value in changes.items():
                setattr(model, field, value)
            try:
                with transaction.atomic():
                    model.save(update_fields=[*changes, "updated_at"])
            except IntegrityError:
                raise Conflict(DUPLICATE_REGISTRATION)
        logger.info(f"Vehicle {model.pk} updated: {sorted(changes)}")
        return to_domain(model)

    def delete(self, vehicle_id: int) -> None:
        """
        Delete a vehicle that no active booking references

        The vehicle row is locked for the check and the delete, so a booking
        being created concurrently either commits first (and blocks the
        delete) or waits and then finds the vehicle gone.
        """
        from apps.bookings.repositories import DjangoBookingRepository  # local import to avoid circular

        with self.uow_factory():
            self._fetch(vehicle_id, lock=True)
            if DjangoBookingRepository().has_active_for_vehicle(vehicle_id):
                raise Conflict("Cannot delete vehicle with active bookings")
            VehicleModel.objects.filter(pk=vehicle_id).delete()
        logger.info(f"Vehicle {vehicle_id} deleted")

    @staticmethod
    def _fetch(vehicle_id: int, lock: bool = False) -> VehicleModel:
        queryset = VehicleModel.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=vehicle_id)
        except VehicleModel.DoesNotExist:
            raise NotFound("Vehicle not found")

    @staticmethod
    def _writable(data: Mapping[str, Any]) -> dict:
        return {key: data[key] for key in WRITABLE_FIELDS if key in data}
