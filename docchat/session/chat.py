"""Chat controller: ordered transcript and the single outstanding question.

At most one question is in flight. The user turn is appended as soon as a
question is accepted, and exactly one assistant turn (the answer, or the
apology on failure) follows it before another question is accepted, so
answers can never be attributed to the wrong question.
"""

import asyncio
import logging
from typing import Protocol

from docchat.errors import ClientError
from docchat.models.schemas import ChatReplyPayload
from docchat.models.session import ChatState, DocumentExcerpt, Turn
from docchat.session.store import ObservableStore

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = (
    "Sorry, I encountered an error while processing your request. Please try again."
)


class QuestionAnswerer(Protocol):
    async def ask(self, question: str) -> ChatReplyPayload: ...


class ChatController(ObservableStore):
    """Owns the transcript of one session."""

    def __init__(self, client: QuestionAnswerer) -> None:
        super().__init__()
        self._client = client
        self._turns: list[Turn] = []
        self._state = ChatState.IDLE
        self._pending: str | None = None

    @property
    def transcript(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def pending_question(self) -> str | None:
        """Text of the question awaiting its answer, or None when idle."""
        return self._pending

    @property
    def is_awaiting_answer(self) -> bool:
        return self._state is ChatState.AWAITING_ANSWER

    async def ask(self, question: str) -> bool:
        """Submit a question and append its answer to the transcript.

        The user turn is appended before the first suspension point, so
        concurrent callers observe ``AWAITING_ANSWER`` immediately.

        Args:
            question: The user's question, kept verbatim in the transcript.

        Returns:
            True if the question was accepted; False for blank input or
            while a previous question is still pending.
        """
        if not question or not question.strip():
            return False
        if self._state is not ChatState.IDLE:
            logger.debug("Question ignored: previous answer still pending")
            return False

        self._turns.append(Turn.user(question))
        self._state = ChatState.AWAITING_ANSWER
        self._pending = question
        self._notify()

        try:
            reply = await self._client.ask(question)
        except ClientError as e:
            logger.warning(f"Chat request failed: {e}")
            answer = Turn.assistant(APOLOGY_MESSAGE)
        except asyncio.CancelledError:
            self._resolve(Turn.assistant(APOLOGY_MESSAGE))
            raise
        except Exception:
            logger.exception("Chat request failed unexpectedly")
            answer = Turn.assistant(APOLOGY_MESSAGE)
        else:
            excerpts = tuple(DocumentExcerpt.from_source(doc) for doc in reply.docs or [])
            answer = Turn.assistant(reply.message, excerpts)
            logger.info(f"Answer received with {len(excerpts)} source document(s)")

        self._resolve(answer)
        return True

    def _resolve(self, answer: Turn) -> None:
        self._turns.append(answer)
        self._state = ChatState.IDLE
        self._pending = None
        self._notify()
