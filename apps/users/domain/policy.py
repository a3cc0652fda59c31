"""
Access Policy

Pure authorization predicates over an Actor and a target resource.
No I/O and no Django imports: the HTTP layer builds the Actor from the
authenticated request user and passes it in.
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.errors import Forbidden, InvalidInput, Unauthorized


class Role(str, Enum):
    ADMIN = 'admin'
    CUSTOMER = 'customer'


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing an operation"""
    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user) -> 'Actor | None':
        """Build an Actor from a request user; None for anonymous users"""
        if user is None or not getattr(user, 'is_authenticated', False):
            return None
        role = Role.ADMIN if getattr(user, 'role', None) == Role.ADMIN.value else Role.CUSTOMER
        return cls(id=int(user.pk), role=role)


def require_actor(actor: Actor | None) -> Actor:
    if actor is None:
        raise Unauthorized()
    return actor


def can_update_user(actor: Actor, target_id: int) -> bool:
    return actor.is_admin or actor.id == target_id


def can_change_role(actor: Actor) -> bool:
    return actor.is_admin


def can_list_users(actor: Actor) -> bool:
    return actor.is_admin


def can_delete_user(actor: Actor) -> bool:
    return actor.is_admin


def can_manage_vehicle(actor: Actor) -> bool:
    return actor.is_admin


def can_cancel_booking(actor: Actor, customer_id: int) -> bool:
    return actor.is_admin or actor.id == customer_id


def can_return_booking(actor: Actor) -> bool:
    return actor.is_admin


def resolve_booking_customer(actor: Actor | None, requested_customer_id: int | None) -> int:
    """
    Decide on whose behalf a booking is created

    Customers always book for themselves; naming another customer is
    Forbidden. Admins must name the customer explicitly.
    """
    actor = require_actor(actor)
    if actor.is_admin:
        if requested_customer_id is None:
            raise InvalidInput("customer_id is required when an admin creates a booking")
        return requested_customer_id
    if requested_customer_id is not None and requested_customer_id != actor.id:
        raise Forbidden("Customers can only create bookings for themselves")
    return actor.id
