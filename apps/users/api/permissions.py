"""DRF permission classes built on the access policy predicates."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from apps.users.domain.policy import Actor, can_delete_user, can_list_users, can_manage_vehicle


def actor_from_request(request) -> Actor | None:  # type: ignore
    return Actor.from_user(getattr(request, "user", None))


class IsAdmin(permissions.BasePermission):
    """Admin-only user management; the policy predicate follows the view action."""

    message = "Forbidden"
    predicates = {
        "list": can_list_users,
        "destroy": can_delete_user,
    }

    def has_permission(self, request, view) -> bool:  # type: ignore
        actor = actor_from_request(request)
        if actor is None:
            return False
        predicate = self.predicates.get(getattr(view, "action", None))
        return predicate(actor) if predicate else actor.is_admin


class IsAdminOrReadOnly(permissions.BasePermission):
    """Anyone may read, only admins may write (vehicle inventory)."""

    message = "Forbidden"

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        actor = actor_from_request(request)
        return actor is not None and can_manage_vehicle(actor)
