"""Session records held by the controllers.

Attempts and turns are frozen models: a controller replaces an attempt with
an updated copy on its single terminal transition, and never touches a turn
after appending it.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from docchat.models.schemas import SourceDocument


class AttemptStatus(str, Enum):
    """Lifecycle of one upload attempt."""

    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not AttemptStatus.UPLOADING


class Attempt(BaseModel):
    """One upload gesture and its tracked lifecycle.

    Attributes:
        id: Unique attempt identifier.
        filename: Original filename of the document.
        size_bytes: Size of the uploaded payload.
        started_at: Wall-clock time the attempt was accepted.
        status: Current lifecycle status.
        error: Failure description once the attempt has failed.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    filename: str
    size_bytes: int = Field(ge=0)
    started_at: datetime
    status: AttemptStatus = AttemptStatus.UPLOADING
    error: str | None = None


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class DocumentExcerpt(BaseModel):
    """A snippet of source text returned alongside an answer."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    page_number: int | None = None
    source_name: str | None = None

    @classmethod
    def from_source(cls, doc: SourceDocument) -> "DocumentExcerpt":
        metadata = doc.metadata
        page_number = None
        source_name = None
        if metadata is not None:
            source_name = metadata.source
            if metadata.loc is not None:
                page_number = metadata.loc.page_number
        return cls(text=doc.page_content, page_number=page_number, source_name=source_name)

    @property
    def page_label(self) -> str:
        """Badge text, e.g. ``Page 3``; unknown or zero pages read ``Page Unknown``."""
        return f"Page {self.page_number or 'Unknown'}"

    @property
    def display_source(self) -> str | None:
        """Last path segment of the source, falling back to the full value."""
        if not self.source_name:
            return None
        return self.source_name.split("/")[-1] or self.source_name


class Turn(BaseModel):
    """One message in the transcript.

    Attributes:
        role: Who produced the message.
        text: Message text. Rendered as markdown for the assistant.
        source_documents: Excerpts the answer was grounded on.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str | None = None
    source_documents: tuple[DocumentExcerpt, ...] = ()

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str, source_documents: tuple[DocumentExcerpt, ...] = ()) -> "Turn":
        return cls(role=Role.ASSISTANT, text=text, source_documents=source_documents)


class ChatState(str, Enum):
    """Chat controller state; new questions are accepted only when idle."""

    IDLE = "idle"
    AWAITING_ANSWER = "awaiting_answer"
