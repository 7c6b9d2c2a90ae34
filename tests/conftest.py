# tests/conftest.py

from __future__ import annotations

import logging

import pytest

from core.event_bus import EventBus
from core.state_manager import STATE_CHANGED
from todo.store import TaskStore


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def events(event_bus: EventBus) -> list[dict]:
    """Every state_changed payload published on the bus, in order."""
    seen: list[dict] = []
    event_bus.subscribe(STATE_CHANGED, seen.append)
    return seen


@pytest.fixture()
def store(event_bus: EventBus) -> TaskStore:
    return TaskStore(event_bus=event_bus)


@pytest.fixture()
def seeded_store(store: TaskStore) -> TaskStore:
    """Three tasks, the middle one completed: ids 1, 2, 3."""
    for text in ("buy milk", "file taxes", "walk dog"):
        store.add_task(text)
    store.toggle(2)
    return store


@pytest.fixture()
def restore_logger():
    """Put the todostate logger back the way it was after setup_logging()."""
    logger = logging.getLogger("todostate")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
