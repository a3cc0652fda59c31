"""Booking ledger models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Reservation of one vehicle for an inclusive range of days."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        CANCELLED = "cancelled", _("Cancelled")
        RETURNED = "returned", _("Returned")

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    vehicle = models.ForeignKey(
        "vehicles.Vehicle",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    rent_start_date = models.DateField()
    rent_end_date = models.DateField()
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Daily price at creation times inclusive days."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rent_end_date__gte=models.F("rent_start_date")),
                name="booking_end_not_before_start",
            ),
            models.CheckConstraint(
                condition=models.Q(total_price__gte=0),
                name="booking_total_price_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "status"], name="booking_vehicle_status_idx"),
            models.Index(fields=["customer", "status"], name="booking_customer_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.vehicle_id} {self.rent_start_date}..{self.rent_end_date}"
