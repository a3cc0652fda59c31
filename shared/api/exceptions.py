"""
DRF exception handler

The only place where domain error kinds become HTTP status codes.
Every error response uses the same envelope:

    {"success": false, "message": "...", "code": "<kind>", "errors": ...}
"""

from __future__ import annotations

import logging

from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

KIND_BY_STATUS: dict[int, ErrorKind] = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.INVALID_INPUT,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorKind.CONFLICT,
}


def error_body(kind: ErrorKind, message: str, errors=None, retryable: bool = False) -> dict:
    body = {
        "success": False,
        "message": message,
        "code": kind.value,
        "errors": errors,
    }
    if retryable:
        body["retryable"] = True
    return body


def domain_exception_handler(exc, context):  # type: ignore
    """Map DomainError kinds and DRF exceptions onto the error envelope."""

    if isinstance(exc, DomainError):
        return Response(
            error_body(exc.kind, exc.message, exc.errors, exc.retryable),
            status=STATUS_BY_KIND[exc.kind],
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        message, errors = "Validation failed", response.data
    else:
        detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
        message, errors = str(detail), None

    kind = KIND_BY_STATUS.get(response.status_code, ErrorKind.INVALID_INPUT)
    if response.status_code >= 500:
        kind = ErrorKind.INTERNAL
    response.data = error_body(kind, message, errors)
    return response
