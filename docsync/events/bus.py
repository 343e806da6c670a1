from collections.abc import Callable

from docsync.events.models import Event
from docsync.logging.logger import Log

Listener = Callable[[Event], None]


class EventBus:
    """Synchronous fan-out of state-change notifications to subscribers."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: Event) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as exc:
                Log.error(f"Event listener failed on {type(event).__name__}: {exc}")
