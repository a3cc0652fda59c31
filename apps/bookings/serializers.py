"""Serializers for the booking ledger endpoints."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class BookingCreateSerializer(serializers.Serializer):
    """Create payload.

    Presence and date format are checked by the create handler so that
    missing fields and bad dates get the ledger's own error kinds.
    """

    customer_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    vehicle_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    rent_start_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    rent_end_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)


class VehicleSummarySerializer(serializers.Serializer):
    vehicle_name = serializers.CharField(source="name")
    registration_number = serializers.CharField()


class CustomerVehicleSummarySerializer(VehicleSummarySerializer):
    type = serializers.CharField(source="type.value")


class CustomerSummarySerializer(serializers.Serializer):
    name = serializers.CharField()
    email = serializers.EmailField()


class BookingSerializer(serializers.Serializer):
    """Read representation of a domain ``Booking``."""

    id = serializers.IntegerField()
    customer_id = serializers.IntegerField()
    vehicle_id = serializers.IntegerField()
    rent_start_date = serializers.DateField(source="dates.start_date")
    rent_end_date = serializers.DateField(source="dates.end_date")
    total_price = serializers.DecimalField(source="total_price.amount", max_digits=10, decimal_places=2)
    status = serializers.CharField(source="status.value")


class BookingCreatedSerializer(BookingSerializer):
    """Create / transition response: booking plus a vehicle price snapshot."""

    vehicle = serializers.SerializerMethodField()

    def get_vehicle(self, booking):  # type: ignore
        if booking.vehicle is None:
            return None
        return {
            "vehicle_name": booking.vehicle.name,
            "daily_rent_price": str(booking.vehicle.daily_price.rounded()),
            "availability_status": booking.vehicle.availability.value,
        }


class AdminBookingSerializer(BookingSerializer):
    customer = CustomerSummarySerializer()
    vehicle = VehicleSummarySerializer()


class CustomerBookingSerializer(BookingSerializer):
    vehicle = CustomerVehicleSummarySerializer()
