"""File picking capability.

Click-to-browse and drag-and-drop both end in a ``FileSelection``: a lazy,
single-shot iterator over at most one picked file. The controllers depend
only on this, never on the widget that produced it.
"""

from collections.abc import Callable, Iterator

from pydantic import BaseModel


class PickedFile(BaseModel):
    """A file supplied by a user gesture.

    Attributes:
        name: Filename as reported by the browser.
        content: Raw file bytes.
        content_type: MIME type reported by the browser, if any.
    """

    name: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class FileSelection(Iterator[PickedFile]):
    """Yields the picked file at most once, loading it on first iteration.

    Once exhausted the selection stays exhausted; it cannot be restarted.
    """

    def __init__(self, loader: Callable[[], PickedFile | None]) -> None:
        self._loader = loader
        self._consumed = False

    @classmethod
    def of(cls, picked: PickedFile) -> "FileSelection":
        return cls(lambda: picked)

    @classmethod
    def empty(cls) -> "FileSelection":
        """A selection for a dismissed picker."""
        return cls(lambda: None)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __iter__(self) -> "FileSelection":
        return self

    def __next__(self) -> PickedFile:
        if self._consumed:
            raise StopIteration
        self._consumed = True
        picked = self._loader()
        if picked is None:
            raise StopIteration
        return picked
