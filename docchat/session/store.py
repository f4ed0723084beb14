"""Observable state base for the controllers."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ObservableStore:
    """Holds subscribers and notifies them after every state mutation.

    Listeners take no arguments and read whatever they need from the
    controller. Notification with no listeners is a no-op, which is what
    lets a request resolve after its view has been torn down.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A callable that removes the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                # A failing view must not corrupt controller state.
                logger.exception(f"Listener {listener!r} failed; skipping")
