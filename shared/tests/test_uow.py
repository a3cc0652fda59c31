from dataclasses import dataclass
from datetime import timedelta
from unittest import mock

import pytest
from django.db import OperationalError

from shared.application.message_bus import MessageBus, message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent
from shared.domain.errors import Conflict, InternalError, NotFound


@dataclass(kw_only=True)
class Pinged(DomainEvent):
    note: str = ""


@dataclass(eq=False)
class Counter(Aggregate):
    def ping(self, note):
        self.add_event(Pinged(aggregate_id=self.id, note=note))


@pytest.fixture
def published():
    with mock.patch.object(message_bus, "publish_events") as spy:
        yield spy


@pytest.mark.django_db
def test_events_published_after_commit(published, django_capture_on_commit_callbacks):
    counter = Counter(id=1)
    counter.ping("hello")

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with DjangoUnitOfWork() as uow:
            uow.collect_events(counter)
            published.assert_not_called()

    assert len(callbacks) == 1
    (events,), _ = published.call_args
    assert [e.note for e in events] == ["hello"]
    assert counter.events == []


@pytest.mark.django_db
def test_domain_error_rolls_back_and_passes_through(published, django_capture_on_commit_callbacks):
    counter = Counter(id=1)
    counter.ping("lost")

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(NotFound):
            with DjangoUnitOfWork() as uow:
                uow.collect_events(counter)
                raise NotFound("Booking not found")

    assert callbacks == []
    published.assert_not_called()


@pytest.mark.django_db
def test_operational_error_becomes_retryable_conflict():
    with pytest.raises(Conflict) as excinfo:
        with DjangoUnitOfWork():
            raise OperationalError("canceling statement due to lock timeout")

    assert excinfo.value.retryable
    assert isinstance(excinfo.value.__cause__, OperationalError)


@pytest.mark.django_db
def test_unexpected_error_becomes_internal():
    with pytest.raises(InternalError) as excinfo:
        with DjangoUnitOfWork():
            raise ValueError("boom")

    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.message == "Internal error"


def test_assign_id_stamps_pending_events():
    counter = Counter()
    counter.ping("first")

    counter.assign_id(42)

    assert counter.id == 42
    assert counter.events[0].aggregate_id == 42


class TestMessageBus:
    def test_one_handler_per_command(self):
        bus = MessageBus()
        bus.register_command_handler(str, len)

        with pytest.raises(ValueError):
            bus.register_command_handler(str, len)
        bus.register_command_handler(str, str.upper, replace=True)

        assert bus.handle_command("abc") == "ABC"

    def test_unknown_command(self):
        with pytest.raises(LookupError):
            MessageBus().handle_command(object())

    def test_failing_event_handler_does_not_stop_others(self):
        bus = MessageBus()
        seen = []

        def broken(event):
            raise RuntimeError("handler failed")

        def recorder(event):
            seen.append(event.note)

        bus.register_event_handler(Pinged, broken)
        bus.register_event_handler(Pinged, recorder)
        bus.register_event_handler(Pinged, recorder)

        bus.publish_events([Pinged(note="a"), Pinged(note="b")])

        assert seen == ["a", "b"]


def test_events_are_stamped_in_utc():
    event = Pinged(note="tz")

    assert event.occurred_at.utcoffset() == timedelta(0)
    assert event.to_dict()["occurred_at"].endswith("+00:00")
