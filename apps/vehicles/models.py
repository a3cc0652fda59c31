"""Vehicle inventory models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import AvailabilityStatus, VehicleType


class Vehicle(models.Model):
    """Rentable vehicle with its stored availability flag."""

    class Type(models.TextChoices):
        CAR = VehicleType.CAR.value, _("Car")
        BIKE = VehicleType.BIKE.value, _("Bike")
        VAN = VehicleType.VAN.value, _("Van")
        SUV = VehicleType.SUV.value, _("SUV")

    class Availability(models.TextChoices):
        AVAILABLE = AvailabilityStatus.AVAILABLE.value, _("Available")
        BOOKED = AvailabilityStatus.BOOKED.value, _("Booked")

    vehicle_name = models.CharField(max_length=200)
    type = models.CharField(max_length=10, choices=Type.choices)
    registration_number = models.CharField(max_length=100, unique=True)
    daily_rent_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    availability_status = models.CharField(
        max_length=20,
        choices=Availability.choices,
        default=Availability.AVAILABLE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Vehicle")
        verbose_name_plural = _("Vehicles")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(daily_rent_price__gt=0),
                name="vehicle_daily_rent_price_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["availability_status"], name="vehicle_availability_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.vehicle_name} ({self.registration_number})"
