"""Celery tasks for the vehicle inventory."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.db.models import Exists, OuterRef  # type: ignore

from .models import Vehicle

logger = logging.getLogger(__name__)


@shared_task(name="vehicles.audit_availability")
def audit_availability() -> dict[str, int]:
    """
    Compare the stored availability flag with the booking ledger.

    A vehicle is expected to be ``booked`` exactly when it has an active
    booking. Mismatches are logged and counted, never rewritten.

    Runs hourly through Celery Beat.

    Returns:
        dict: {"checked": ..., "stale_booked": ..., "stale_available": ...}
    """
    from apps.bookings.models import Booking  # local import to avoid circular

    active = Booking.objects.filter(vehicle=OuterRef("pk"), status=Booking.Status.ACTIVE)
    vehicles = Vehicle.objects.annotate(has_active=Exists(active)).order_by("id")

    checked = stale_booked = stale_available = 0
    for vehicle in vehicles.iterator():
        checked += 1
        flagged_booked = vehicle.availability_status == Vehicle.Availability.BOOKED
        if flagged_booked and not vehicle.has_active:
            stale_booked += 1
            logger.warning(f"Vehicle {vehicle.pk} is flagged booked without an active booking")
        elif not flagged_booked and vehicle.has_active:
            stale_available += 1
            logger.warning(f"Vehicle {vehicle.pk} is flagged available but has an active booking")

    logger.info(
        f"Availability audit: {checked} vehicles checked, "
        f"{stale_booked} stale booked, {stale_available} stale available"
    )
    return {"checked": checked, "stale_booked": stale_booked, "stale_available": stale_available}
