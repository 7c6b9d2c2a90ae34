import logging
from typing import Any, Callable

log = logging.getLogger("todostate.event_bus")


def _name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class EventBus:
    """Synchronous publish/subscribe event system.

    The task store publishes ``state_changed`` here after every mutation
    that changed something; front-ends subscribe their re-render hook.
    Subscribers run inline on the caller's thread, in subscription order,
    after the mutation has fully applied.

    Callbacks are matched by equality, so a bound method such as
    ``self._on_state_changed`` can be unsubscribed with a fresh reference
    to the same method, and subscribing it twice registers it once.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> Callable[[], None]:
        """Register ``callback``. Returns a function that unsubscribes it."""
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback in callbacks:
            log.debug("Already subscribed to '%s': %s", event_type, _name(callback))
        else:
            callbacks.append(callback)
            log.debug("Subscribed to '%s': %s", event_type, _name(callback))
        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        if event_type in self._subscribers:
            self._subscribers[event_type] = [
                cb for cb in self._subscribers[event_type] if cb != callback
            ]
            if not self._subscribers[event_type]:
                del self._subscribers[event_type]

    def subscriber_count(self, event_type: str) -> int:
        return len(self._subscribers.get(event_type, []))

    def publish(self, event_type: str, data: Any = None) -> None:
        # Copy so a handler may (un)subscribe while we iterate
        callbacks = list(self._subscribers.get(event_type, []))

        for callback in callbacks:
            try:
                callback(data)
            except Exception:
                # A broken front-end must not stop the others from rendering
                log.exception(
                    "Error in event handler for '%s': %s",
                    event_type,
                    _name(callback),
                )
