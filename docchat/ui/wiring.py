"""Binding between a browser client and the session controllers.

Kept free of NiceGUI imports so the lifetime rules can be tested without
a running UI.
"""

from collections.abc import Callable, Iterable
from typing import Any, Protocol

from docchat.session.store import ObservableStore

# Plain Enter sends; Shift+Enter falls through to the textarea as a newline
SEND_ON_ENTER = "keydown.enter.exact.prevent"


class PageClient(Protocol):
    """The part of ``nicegui.Client`` used to tie listeners to a page."""

    def on_delete(self, handler: Callable[..., Any]) -> None: ...


def bind_to_client(
    client: PageClient,
    subscriptions: Iterable[tuple[ObservableStore, Callable[[], None]]],
) -> Callable[[], None]:
    """Subscribe listeners for as long as the client exists.

    Listeners are removed when the client is deleted, not on disconnect:
    a disconnect may be a websocket reconnect of the same page.

    Returns:
        The detach function, idempotent.
    """
    unsubscribers = [store.subscribe(listener) for store, listener in subscriptions]

    def detach() -> None:
        # In-flight requests keep running and resolve with nobody listening
        for unsubscribe in unsubscribers:
            unsubscribe()

    client.on_delete(detach)
    return detach
