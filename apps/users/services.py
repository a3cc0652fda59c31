"""User management services.

Plain CRUD around the user model. Permission decisions come from the
access policy; the only consistency rule is that a user holding active
bookings cannot be deleted.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction  # type: ignore

from apps.users.domain.policy import (
    Actor,
    can_change_role,
    can_delete_user,
    can_update_user,
    require_actor,
)
from shared.domain.errors import Conflict, Forbidden, NotFound

from .models import User

logger = logging.getLogger(__name__)


class DjangoCustomerDirectory:
    """Lookup of booking customers, injected into the booking handlers."""

    def exists(self, user_id: int) -> bool:
        return User.objects.filter(pk=user_id).exists()


def _get_user(user_id: int, *, lock: bool = False) -> User:
    qs = User.objects.all()
    if lock:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found")


def update_user(actor: Actor | None, user_id: int, changes: dict[str, Any]) -> User:
    """Admins update anyone (including role), customers only their own profile."""

    actor = require_actor(actor)
    if not can_update_user(actor, user_id):
        raise Forbidden()
    if "role" in changes and not can_change_role(actor):
        raise Forbidden("Forbidden: cannot change role")

    try:
        with transaction.atomic():
            user = _get_user(user_id, lock=True)
            for field, value in changes.items():
                if field == "email":
                    value = value.lower()
                setattr(user, field, value)
            # Only the submitted columns; a concurrent role change is kept
            user.save(update_fields=[*changes, "updated_at"])
    except IntegrityError:
        raise Conflict("Email already registered")

    logger.info(f"User {user.pk} updated by {actor.role.value} {actor.id}: {sorted(changes)}")
    return user


def delete_user(actor: Actor | None, user_id: int) -> None:
    """Delete a user that holds no active bookings (admin only)."""

    from apps.bookings.repositories import DjangoBookingRepository  # local import to avoid circular

    actor = require_actor(actor)
    if not can_delete_user(actor):
        raise Forbidden()

    with transaction.atomic():
        user = _get_user(user_id, lock=True)
        if DjangoBookingRepository().has_active_for_customer(user.pk):
            raise Conflict("Cannot delete user with active bookings")
        user.delete()

    logger.info(f"User {user_id} deleted by admin {actor.id}")
