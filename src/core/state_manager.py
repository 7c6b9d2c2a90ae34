"""Revision tracking for the task store.

The store never hands out persistent collections; instead every change
advances a revision counter and raises a dirty flag. Front-ends either
subscribe to ``state_changed`` on the event bus or poll ``consume_dirty()``
from their render loop.
"""

import logging

log = logging.getLogger("todostate.state_manager")

STATE_CHANGED = "state_changed"


class StateManager:
    """Coordinates change notification between the store and front-ends."""

    def __init__(self, event_bus=None):
        self.event_bus = event_bus
        self._revision = 0
        self._dirty = True  # first frame always renders

    @property
    def revision(self) -> int:
        return self._revision

    def mark_changed(self, change_type: str, task_id: int | None = None) -> int:
        """Advance the revision and notify subscribers. Returns the new revision."""
        self._revision += 1
        self._dirty = True
        log.debug("Revision %d (%s, id=%s)", self._revision, change_type, task_id)

        if self.event_bus:
            self.event_bus.publish(STATE_CHANGED, {
                "type": change_type,
                "revision": self._revision,
                "id": task_id,
            })
        return self._revision

    def consume_dirty(self) -> bool:
        """Check and clear dirty flag. Returns True if state changed."""
        was_dirty = self._dirty
        self._dirty = False
        return was_dirty
