"""
Booking Queries

Read side of the booking ledger. Queries take no locks.
"""

from dataclasses import dataclass
from typing import List

from apps.bookings.domain.entities import Booking
from apps.users.domain.policy import Actor, require_actor


@dataclass
class ListBookingsQuery:
    actor: Actor | None


class ListBookingsHandler:
    """Admins see every booking, customers only their own; newest first."""

    def __init__(self, bookings):
        self.bookings = bookings

    def handle(self, query: ListBookingsQuery) -> List[Booking]:
        actor = require_actor(query.actor)
        if actor.is_admin:
            return self.bookings.list_all()
        return self.bookings.list_for_customer(actor.id)
