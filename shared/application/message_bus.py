"""
Message Bus

Views send booking commands and queries through the bus; a unit of work
hands its collected domain events to ``publish_events`` once the
transaction has committed.
"""

from typing import Any, Callable, Dict, List, Type
import logging
import time

from shared.domain.base import DomainEvent
from shared.domain.errors import DomainError

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Routes messages to handlers

    Commands and queries: exactly one handler per message type.
    Events: any number of subscribers, each called once per event.
    """

    def __init__(self):
        self._routes: Dict[Type, Callable[[Any], Any]] = {}
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_command_handler(self, message_type: Type, handler: Callable, replace: bool = False):
        """
        Route a command (or query) type to its handler

        A second registration for the same type is an error unless
        ``replace`` is set; wiring runs again whenever the app registry is
        rebuilt, e.g. by the test runner.
        """
        if message_type in self._routes and not replace:
            raise ValueError(f"{message_type.__name__} already has a handler")
        self._routes[message_type] = handler
        logger.debug(f"Routed {message_type.__name__} to {getattr(handler, '__qualname__', handler)}")

    register_query_handler = register_command_handler

    def register_event_handler(self, event_type: Type[DomainEvent], handler: Callable[[DomainEvent], None]):
        """Subscribe a handler; subscribing the same handler twice is a no-op"""
        subscribers = self._subscribers.setdefault(event_type, [])
        if handler not in subscribers:
            subscribers.append(handler)

    def handle_command(self, message: Any) -> Any:
        """
        Run the handler routed for ``type(message)`` and return its result

        DomainErrors are expected outcomes (validation, policy, conflicts)
        and are logged at info; anything else is logged as an error.
        Both propagate to the caller.
        """
        name = type(message).__name__
        handler = self._routes.get(type(message))
        if handler is None:
            raise LookupError(f"No handler registered for {name}")

        started = time.monotonic()
        try:
            result = handler(message)
        except DomainError as e:
            logger.info(f"{name} rejected ({e.kind.value}): {e.message}")
            raise
        except Exception as e:
            logger.error(f"{name} failed: {e}")
            raise
        logger.debug(f"{name} handled in {(time.monotonic() - started) * 1000:.1f}ms")
        return result

    handle_query = handle_command

    def publish_events(self, events: List[DomainEvent]):
        """
        Deliver events to their subscribers

        A failing subscriber is logged and skipped; the others still run.
        """
        for event in events:
            name = type(event).__name__
            for handler in self._subscribers.get(type(event), []):
                try:
                    handler(event)
                except Exception as e:
                    logger.error(f"Subscriber {handler.__name__} failed on {name} ({event.event_id}): {e}", exc_info=True)


# Process-wide bus; apps.bookings registers its handlers on it in AppConfig.ready()
message_bus = MessageBus()
