"""
Booking Event Handlers

Subscribers to booking ledger events, run after the transaction commits.
The serialized event rides along as the ``domain_event`` log field.
"""

import logging

from apps.bookings.domain.events import BookingCancelled, BookingCreated, BookingReturned

logger = logging.getLogger(__name__)


def log_booking_created(event: BookingCreated):
    logger.info(
        f"Booking {event.aggregate_id} committed: vehicle {event.vehicle_id}, "
        f"customer {event.customer_id}, {event.dates}, total {event.total_price}",
        extra={"domain_event": event.to_dict()},
    )


def log_vehicle_released(event: BookingCancelled | BookingReturned):
    logger.info(
        f"Booking {event.aggregate_id} {event.__class__.__name__}: "
        f"vehicle {event.vehicle_id} released",
        extra={"domain_event": event.to_dict()},
    )
