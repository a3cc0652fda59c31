"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "vehicle",
        "customer",
        "status",
        "rent_start_date",
        "rent_end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "rent_start_date")
    search_fields = ("vehicle__registration_number", "customer__email")
    # Status and price change only through the ledger
    readonly_fields = ("status", "total_price", "created_at", "updated_at")
