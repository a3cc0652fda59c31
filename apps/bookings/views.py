"""API views for the booking ledger."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore

from apps.users.api.permissions import actor_from_request
from shared.api.responses import success
from shared.application.message_bus import message_bus

from .application.command_handlers import CreateBookingCommand, TransitionBookingCommand
from .application.queries import ListBookingsQuery
from .serializers import (
    AdminBookingSerializer,
    BookingCreatedSerializer,
    BookingCreateSerializer,
    BookingStatusSerializer,
    CustomerBookingSerializer,
)


class BookingViewSet(viewsets.ViewSet):
    """Create, list and transition bookings. Authorization is decided by the handlers."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = message_bus.handle_command(
            CreateBookingCommand(
                actor=actor_from_request(request),
                customer_id=data.get("customer_id"),
                vehicle_id=data.get("vehicle_id"),
                rent_start_date=data.get("rent_start_date"),
                rent_end_date=data.get("rent_end_date"),
            )
        )
        return success(
            BookingCreatedSerializer(booking).data,
            "Booking created successfully",
            status=status.HTTP_201_CREATED,
        )

    def list(self, request):  # type: ignore
        actor = actor_from_request(request)
        bookings = message_bus.handle_query(ListBookingsQuery(actor=actor))
        if actor.is_admin:
            return success(AdminBookingSerializer(bookings, many=True).data, "Bookings retrieved successfully")
        return success(CustomerBookingSerializer(bookings, many=True).data, "Your bookings retrieved successfully")

    def update(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = message_bus.handle_command(
            TransitionBookingCommand(
                actor=actor_from_request(request),
                booking_id=int(pk),
                status=serializer.validated_data.get("status"),
            )
        )
        message = (
            "Booking cancelled successfully"
            if booking.status.value == "cancelled"
            else "Booking marked as returned. Vehicle is now available"
        )
        return success(BookingCreatedSerializer(booking).data, message)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk)
