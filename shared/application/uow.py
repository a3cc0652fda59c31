"""
Unit of Work

One database transaction per booking write. Domain events collected
inside the block reach the message bus only once the transaction has
committed; a rollback drops them.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.conf import settings
from django.db import OperationalError, transaction

from shared.domain.base import DomainEvent
from shared.domain.errors import Conflict, DomainError, InternalError

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Transaction boundary seen by the command handlers

    Subclasses decide what commit and rollback mean; event collection is
    shared.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        return False

    @abstractmethod
    def commit(self):
        ...

    @abstractmethod
    def rollback(self):
        ...

    def collect_events(self, aggregate):
        """Move the aggregate's pending events into this unit of work"""
        pending = aggregate.events
        if not pending:
            return
        self._events.extend(pending)
        aggregate.clear_events()
        logger.debug(f"Collected {len(pending)} events from {type(aggregate).__name__} {aggregate.id}")


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Wraps ``transaction.atomic()``. Row locks taken with
    ``select_for_update()`` inside the block are held until it exits.

    Failure contract:
    - DomainError raised inside the block: rollback, re-raised unchanged
    - OperationalError (lock wait timed out, lock not available): rollback,
      raised as a retryable Conflict
    - anything else: rollback, raised as an opaque InternalError

    Usage:
        with DjangoUnitOfWork() as uow:
            vehicle = inventory.get_for_update(vehicle_id)
            booking = Booking.open(customer_id, vehicle, dates)
            booking_repo.add(booking)
            uow.collect_events(booking)
        # committed; events go to the bus from transaction.on_commit
    """

    def __init__(self, using: str | None = None, lock_timeout_ms: int | None = None):
        super().__init__()
        self.using = using
        if lock_timeout_ms is None:
            lock_timeout_ms = getattr(settings, 'BOOKING_LOCK_TIMEOUT_MS', 0)
        self.lock_timeout_ms = int(lock_timeout_ms or 0)
        self._transaction = None

    def __enter__(self):
        self._transaction = transaction.atomic(using=self.using)
        self._transaction.__enter__()
        try:
            self._apply_lock_timeout()
        except Exception as exc:
            self._transaction.__exit__(type(exc), exc, exc.__traceback__)
            raise self._translate(exc) from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        super().__exit__(exc_type, exc_val, exc_tb)

        try:
            self._transaction.__exit__(exc_type, exc_val, exc_tb)
        except Exception as commit_error:
            # Commit itself failed; Django drops the on_commit callbacks.
            raise self._translate(commit_error) from commit_error

        if exc_val is not None:
            translated = self._translate(exc_val)
            if translated is not exc_val:
                raise translated from exc_val
        return False

    def commit(self):
        """Schedule publication of the collected events for after the commit"""
        events, self._events = self._events, []
        logger.debug(f"Committing transaction with {len(events)} events")
        if events:
            transaction.on_commit(lambda: self._publish_events(events), using=self.using)

    def rollback(self):
        logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events = []

    def _apply_lock_timeout(self):
        """Bound lock waits for this transaction only (PostgreSQL)"""
        if not self.lock_timeout_ms:
            return
        connection = transaction.get_connection(self.using)
        if connection.vendor != 'postgresql':
            return
        with connection.cursor() as cursor:
            cursor.execute(
                "SELECT set_config('lock_timeout', %s, true)",
                [f"{self.lock_timeout_ms}ms"],
            )

    @staticmethod
    def _translate(exc: BaseException) -> BaseException:
        if isinstance(exc, DomainError):
            return exc
        if isinstance(exc, OperationalError):
            logger.warning(f"Lock wait aborted, transaction rolled back: {exc}")
            return Conflict(
                "Resource is busy, please retry",
                retryable=True,
            )
        if not isinstance(exc, Exception):
            # KeyboardInterrupt, SystemExit: never masked
            return exc
        logger.error(f"Unexpected error inside unit of work: {exc}", exc_info=exc)
        return InternalError()

    def _publish_events(self, events: List[DomainEvent]):
        """
        Publish collected events to message bus

        Called after successful transaction commit.
        """
        from shared.application.message_bus import message_bus

        logger.info(f"Publishing {len(events)} domain events after commit")

        try:
            message_bus.publish_events(events)
        except Exception as e:
            logger.error(f"Error publishing events: {e}", exc_info=True)
            # Data is already committed; publishing failures are only logged
