"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore

from apps.users.api.permissions import IsAdmin, actor_from_request
from shared.api.responses import success

from .serializers import UserSerializer, UserUpdateSerializer
from .services import delete_user, update_user

User = get_user_model()


class UserViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """User management.

    - listing and deletion are admin only
    - update is allowed to admins and to the user themself (checked by
      the access policy, role changes are admin only)
    """

    serializer_class = UserSerializer
    queryset = User.objects.order_by("id")
    lookup_value_regex = r"\d+"

    def get_permissions(self):  # type: ignore
        if self.action in {"update", "partial_update"}:
            return [permissions.IsAuthenticated()]
        return [IsAdmin()]

    def list(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success(serializer.data, "Users retrieved successfully")

    def update(self, request, pk=None, partial=False):  # type: ignore
        serializer = UserUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = update_user(actor_from_request(request), int(pk), dict(serializer.validated_data))
        return success(UserSerializer(user).data, "User updated successfully")

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        delete_user(actor_from_request(request), int(pk))
        return success(message="User deleted successfully")
