"""
Domain Errors

Closed set of failure kinds raised by the domain and application layers.
Transport status codes are attached only at the HTTP boundary
(see ``shared.api.exceptions``).
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Every failure the core can report belongs to exactly one kind."""
    INVALID_INPUT = 'invalid_input'      # malformed or missing fields
    INVALID_RANGE = 'invalid_range'      # end date before start date
    INVALID_STATE = 'invalid_state'      # illegal lifecycle transition
    UNAUTHORIZED = 'unauthorized'        # no actor
    FORBIDDEN = 'forbidden'              # actor lacks permission
    NOT_FOUND = 'not_found'              # entity absent
    CONFLICT = 'conflict'                # overlap, duplicate, blocked delete, lock timeout
    INTERNAL = 'internal'                # unexpected failure, already rolled back


class DomainError(Exception):
    """
    Base class for typed domain failures

    Attributes:
        kind: The ErrorKind of the failure
        message: Human readable message, safe to show to the caller
        errors: Optional structured details (field errors etc.)
        retryable: True when the caller may simply retry the operation
    """
    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = 'Internal error'

    def __init__(self, message: str | None = None, *, errors: Any = None, retryable: bool = False):
        self.message = message or self.default_message
        self.errors = errors
        self.retryable = retryable
        super().__init__(self.message)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidInput(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = 'Invalid input'


class InvalidRange(DomainError):
    kind = ErrorKind.INVALID_RANGE
    default_message = 'Invalid date range'


class InvalidState(DomainError):
    kind = ErrorKind.INVALID_STATE
    default_message = 'Operation not allowed in the current state'


class Unauthorized(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = 'Unauthorized'


class Forbidden(DomainError):
    kind = ErrorKind.FORBIDDEN
    default_message = 'Forbidden'


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = 'Not found'


class Conflict(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = 'Conflict'


class InternalError(DomainError):
    kind = ErrorKind.INTERNAL
    default_message = 'Internal error'
