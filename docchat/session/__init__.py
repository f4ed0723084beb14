"""Session controllers: the stateful core of the client.

Responsibilities:
    - Upload attempt lifecycle with simulated, capped progress
    - Ordered chat transcript with one outstanding question at a time
    - Observable state so views re-render on every mutation
    - File picking abstracted as a single-shot selection

Views subscribe to a controller and read its state; they never mutate the
attempt list or transcript directly.
"""

from docchat.session.chat import APOLOGY_MESSAGE, ChatController
from docchat.session.picker import FileSelection, PickedFile
from docchat.session.progress import PROGRESS_CAP, PROGRESS_DONE, estimate_progress
from docchat.session.store import ObservableStore
from docchat.session.upload import UploadController

__all__ = [
    "APOLOGY_MESSAGE",
    "PROGRESS_CAP",
    "PROGRESS_DONE",
    "ChatController",
    "FileSelection",
    "ObservableStore",
    "PickedFile",
    "UploadController",
    "estimate_progress",
]
