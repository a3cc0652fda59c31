"""
Base Domain Classes

Building blocks shared by the vehicle and booking domains:
- Entity: identified by its database primary key
- ValueObject: immutable, compared by value (Money, DateRange)
- Aggregate: entity that records DomainEvents for the unit of work
- DomainEvent: fact about the ledger, published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4


@dataclass
class Entity(ABC):
    """
    Identity is the database primary key. An entity that was not persisted
    yet has ``id=None`` and is only equal to itself.
    """
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        if self.id is None:
            return id(self)
        return hash((type(self).__name__, self.id))


@dataclass(frozen=True)
class ValueObject(ABC):
    """Marker base for frozen dataclasses compared field by field"""


@dataclass(eq=False)
class Aggregate(Entity):
    """
    Entity that records domain events

    Events stay on the aggregate until a unit of work collects them; the
    unit of work hands them to the message bus after the commit.
    """
    _events: List['DomainEvent'] = field(default_factory=list, repr=False, init=False, compare=False)

    def add_event(self, event: 'DomainEvent'):
        self._events.append(event)

    def assign_id(self, id: int):
        """Set the identity given by the database and stamp pending events with it"""
        self.id = id
        for event in self._events:
            if event.aggregate_id is None:
                event.aggregate_id = id

    def clear_events(self):
        self._events.clear()

    @property
    def events(self) -> List['DomainEvent']:
        """Pending events (a copy)"""
        return list(self._events)


@dataclass
class DomainEvent:
    """
    Something that happened to an aggregate

    ``aggregate_id`` may be None while the aggregate is unsaved; see
    ``Aggregate.assign_id``.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: int | None = None

    def to_dict(self) -> dict:
        """JSON-safe representation, used as structured log payload"""
        return {
            'event_id': str(self.event_id),
            'event_type': type(self).__name__,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': self.aggregate_id,
        }
