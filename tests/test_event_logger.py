"""Tests for the fire-and-forget click event logger."""

import asyncio
import logging

import pytest

from redirector.db.models import ClickEvent
from redirector.services.event_logger import EventLogger


class RecordingStore:
    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.events = []

    async def append(self, event):
        if self.delay:
            await asyncio.sleep(self.delay)
        self.events.append(event)
        return event


class BrokenStore:
    async def append(self, event):
        raise ConnectionError("store unreachable")


def make_event(slug: str = "abc") -> ClickEvent:
    return ClickEvent(slug=slug, dest="https://x.test", ip="192.0.2.1", ua="")


@pytest.mark.asyncio
async def test_record_does_not_wait_for_the_store():
    store = RecordingStore(delay=0.05)
    event_logger = EventLogger(store)

    event_logger.record(make_event())

    assert store.events == []
    assert event_logger.pending == 1

    await event_logger.drain()

    assert [event.slug for event in store.events] == ["abc"]
    assert event_logger.pending == 0


@pytest.mark.asyncio
async def test_store_errors_are_logged_and_dropped(caplog):
    event_logger = EventLogger(BrokenStore())

    with caplog.at_level(logging.ERROR, logger="redirector.events"):
        event_logger.record(make_event("broken"))
        await event_logger.drain()

    assert event_logger.pending == 0
    assert "Failed to log click for 'broken': store unreachable" in caplog.text


@pytest.mark.asyncio
async def test_record_without_store_is_a_noop():
    event_logger = EventLogger(None)

    event_logger.record(make_event())

    assert event_logger.enabled is False
    assert event_logger.pending == 0
    await event_logger.drain()


@pytest.mark.asyncio
async def test_drain_timeout_leaves_slow_writes_running(caplog):
    store = RecordingStore(delay=0.5)
    event_logger = EventLogger(store)
    event_logger.record(make_event())

    with caplog.at_level(logging.WARNING, logger="redirector.events"):
        await event_logger.drain(timeout=0.01)

    assert event_logger.pending == 1
    assert "still pending after drain" in caplog.text

    await event_logger.drain()
    assert len(store.events) == 1


@pytest.mark.asyncio
async def test_concurrent_records_all_complete():
    store = RecordingStore(delay=0.01)
    event_logger = EventLogger(store)

    for i in range(20):
        event_logger.record(make_event(f"s{i}"))
    await event_logger.drain()

    assert sorted(event.slug for event in store.events) == sorted(f"s{i}" for i in range(20))
