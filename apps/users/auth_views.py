"""Views for authentication flows (signup, signin)."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from shared.api.responses import success

from .auth_serializers import SigninSerializer, SignupSerializer, tokens_for_user
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


class SignupView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User {user.pk} registered with role {user.role}")
        return success(UserSerializer(user).data, "User registered successfully", status.HTTP_201_CREATED)


class SigninView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = SigninSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        data = {
            **tokens_for_user(user),
            "user": UserSerializer(user).data,
        }
        return success(data, "Login successful")
