"""
Unit tests for the in-memory event bus and domain events.
"""

import uuid

import pytest

from catalog.domain.events import AppCreated
from core.domain.events import EventHandler
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.events import LicenseIssued


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("boom")


class TestDomainEvents:
    """Tests for event serialisation."""

    def test_event_type_and_payload(self):
        app_id = uuid.uuid4()
        event = AppCreated(app_id=app_id, name="Widget")

        data = event.to_dict()
        assert data["event_type"] == "AppCreated"
        assert data["aggregate_id"] == str(app_id)
        assert data["app_name"] == "Widget"
        assert "occurred_at" in data

    def test_each_event_has_its_own_id(self):
        first = AppCreated(app_id=uuid.uuid4(), name="A")
        second = AppCreated(app_id=uuid.uuid4(), name="B")
        assert first.event_id != second.event_id


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers_of_that_type_only(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(AppCreated, handler)

        await bus.publish(AppCreated(app_id=uuid.uuid4(), name="Widget"))
        await bus.publish(LicenseIssued(uuid.uuid4(), "Widget", 1, "pre_generated"))

        assert [event.event_type for event in handler.events] == ["AppCreated"]

    async def test_subscribing_same_handler_class_twice_is_a_noop(self):
        bus = InMemoryEventBus()
        bus.subscribe(AppCreated, RecordingHandler())
        bus.subscribe(AppCreated, RecordingHandler())

        assert len(bus.handlers_for(AppCreated)) == 1

    async def test_failing_handler_does_not_break_publish(self):
        bus = InMemoryEventBus()
        recorder = RecordingHandler()
        bus.subscribe(AppCreated, FailingHandler())
        bus.subscribe(AppCreated, recorder)

        await bus.publish(AppCreated(app_id=uuid.uuid4(), name="Widget"))

        assert len(recorder.events) == 1

    async def test_publish_without_subscribers(self):
        await InMemoryEventBus().publish(AppCreated(app_id=uuid.uuid4(), name="Widget"))

    async def test_clear_drops_subscriptions(self):
        bus = InMemoryEventBus()
        bus.subscribe(AppCreated, RecordingHandler())
        bus.clear()

        assert bus.handlers_for(AppCreated) == []
