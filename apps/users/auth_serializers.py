"""Serializers for authentication flows (signup, signin)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from shared.domain.errors import Unauthorized

from .models import PHONE_VALIDATOR

User = get_user_model()


def tokens_for_user(user) -> dict[str, str]:
    """Issue a token pair carrying the claims API clients rely on."""
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    refresh["name"] = user.name
    refresh["email"] = user.email
    return {"token": str(refresh.access_token), "refresh": str(refresh)}


class SignupSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    phone = serializers.CharField(max_length=16, validators=[PHONE_VALIDATOR])
    role = serializers.ChoiceField(choices=User.RoleChoices.choices, default=User.RoleChoices.CUSTOMER)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered")
        return value.lower()

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class SigninSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise Unauthorized("Invalid email or password")

        if not user.is_active or not user.check_password(attrs["password"]):
            raise Unauthorized("Invalid email or password")

        attrs["user"] = user
        return attrs
