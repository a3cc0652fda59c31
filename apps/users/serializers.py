"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public user representation (never includes the password)."""

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "role",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.Serializer):
    """Partial profile update; every field is optional."""

    name = serializers.CharField(min_length=2, max_length=100, required=False)
    email = serializers.EmailField(max_length=150, required=False)
    phone = serializers.CharField(max_length=16, required=False, validators=[PHONE_VALIDATOR])
    role = serializers.ChoiceField(choices=User.RoleChoices.choices, required=False)
