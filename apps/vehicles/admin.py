"""Admin registrations for the vehicle inventory."""

from __future__ import annotations

from django.contrib import admin  # type: ignore

from .models import Vehicle


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("vehicle_name", "type", "registration_number", "daily_rent_price", "availability_status")
    list_filter = ("type", "availability_status")
    search_fields = ("vehicle_name", "registration_number")
    readonly_fields = ("created_at", "updated_at")
