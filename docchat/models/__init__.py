"""Pydantic models for wire payloads and session state.

Provides type safety and validation at the network boundary and immutable
records for the controllers.

Models:
    - ChatReplyPayload: Chat endpoint response body
    - SourceDocument: Retrieved chunk with page/source metadata
    - Attempt: One upload attempt and its status
    - Turn: One transcript message with its excerpts
    - DocumentExcerpt: Excerpt attributed to a page and source
"""

from docchat.models.schemas import ChatReplyPayload, PageLocation, SourceDocument, SourceMetadata
from docchat.models.session import (
    Attempt,
    AttemptStatus,
    ChatState,
    DocumentExcerpt,
    Role,
    Turn,
)

__all__ = [
    "Attempt",
    "AttemptStatus",
    "ChatReplyPayload",
    "ChatState",
    "DocumentExcerpt",
    "PageLocation",
    "Role",
    "SourceDocument",
    "SourceMetadata",
    "Turn",
]
