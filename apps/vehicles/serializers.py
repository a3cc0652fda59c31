"""Serializers for the vehicle inventory endpoints."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Vehicle


class VehicleInputSerializer(serializers.Serializer):
    """Create / update payload. Uniqueness of the registration number is left to the inventory."""

    vehicle_name = serializers.CharField(max_length=200)
    type = serializers.ChoiceField(choices=Vehicle.Type.choices)
    registration_number = serializers.CharField(max_length=100)
    daily_rent_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    availability_status = serializers.ChoiceField(
        choices=Vehicle.Availability.choices,
        required=False,
    )


class VehicleSerializer(serializers.Serializer):
    """Read representation of a domain ``Vehicle``."""

    id = serializers.IntegerField(read_only=True)
    vehicle_name = serializers.CharField(source="name", read_only=True)
    type = serializers.CharField(source="type.value", read_only=True)
    registration_number = serializers.CharField(read_only=True)
    daily_rent_price = serializers.DecimalField(
        source="daily_price.amount",
        max_digits=10,
        decimal_places=2,
        read_only=True,
    )
    availability_status = serializers.CharField(source="availability.value", read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
