"""Upload controller: lifecycle and progress of document upload attempts.

Each accepted file becomes an ``Attempt`` that starts ``UPLOADING`` and makes
exactly one transition to ``SUCCEEDED`` or ``FAILED`` when its remote call
resolves. Attempts are independent of each other: completion is applied by
attempt id only and there is no shared progress counter.

Rejected files (unknown type, too large) raise ``ValidationError`` before an
attempt exists or any request is made. Remote failures never raise; they
become the ``FAILED`` status with the error recorded on the attempt.
"""

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from docchat.config import PDF_CONTENT_TYPE, ClientConfig, get_client_config
from docchat.errors import ClientError, UploadInProgressError, ValidationError
from docchat.models.session import Attempt, AttemptStatus
from docchat.session.picker import FileSelection
from docchat.session.progress import PROGRESS_DONE, estimate_progress
from docchat.session.store import ObservableStore

logger = logging.getLogger(__name__)


class DocumentUploader(Protocol):
    async def submit_document(
        self, file_bytes: bytes, filename: str, content_type: str = ...
    ) -> object: ...


class UploadController(ObservableStore):
    """Owns the upload attempts of one session.

    Listeners are notified when an attempt starts, when it resolves, when it
    is hidden, and periodically while any attempt is in flight so progress
    bars can advance.
    """

    def __init__(
        self,
        client: DocumentUploader,
        config: ClientConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Performs the remote upload call.
            config: Optional client configuration.
                    Loads from environment if not provided.
            clock: Monotonic clock in seconds, used for progress estimates.
        """
        super().__init__()
        self._client = client
        self._config = config or get_client_config()
        self._clock = clock
        self._attempts: dict[str, Attempt] = {}
        self._started: dict[str, float] = {}
        self._hidden: set[str] = set()
        self._inflight: dict[str, asyncio.Task[None]] = {}
        self._pulse_task: asyncio.Task[None] | None = None

    # === State ===

    @property
    def attempts(self) -> tuple[Attempt, ...]:
        """All attempts of the session in submission order."""
        return tuple(self._attempts.values())

    @property
    def visible_attempts(self) -> tuple[Attempt, ...]:
        return tuple(a for a in self._attempts.values() if a.id not in self._hidden)

    @property
    def is_busy(self) -> bool:
        return any(a.status is AttemptStatus.UPLOADING for a in self._attempts.values())

    def get(self, attempt_id: str) -> Attempt:
        """Return the current record of an attempt.

        Raises:
            KeyError: Unknown attempt id.
        """
        return self._attempts[attempt_id]

    def progress(self, attempt_id: str) -> float:
        """Estimated completion percentage of an attempt.

        Stays below 90 while the remote call is pending and is 100 once the
        attempt is terminal, whether it succeeded or failed.

        Raises:
            KeyError: Unknown attempt id.
        """
        attempt = self._attempts[attempt_id]
        if attempt.status.is_terminal:
            return PROGRESS_DONE
        elapsed = self._clock() - self._started[attempt_id]
        return estimate_progress(elapsed, self._config.progress_time_constant)

    # === Operations ===

    def validate_document(
        self, filename: str, size_bytes: int, content_type: str | None = None
    ) -> None:
        """Check a file against the accepted types and size limit.

        Raises:
            ValidationError: If the file must not be uploaded.
        """
        if not filename or not filename.strip():
            raise ValidationError("Filename is required")

        accepted = ", ".join(self._config.allowed_extensions)
        if not filename.lower().endswith(self._config.allowed_extensions):
            raise ValidationError(f"Unsupported file type: {filename} (accepted: {accepted})")

        # Browsers report an empty type for files they cannot classify
        if content_type and content_type.lower() not in self._config.allowed_content_types:
            raise ValidationError(f"Unsupported content type {content_type!r} for {filename}")

        if size_bytes < 0:
            raise ValidationError(f"Invalid file size: {size_bytes}")

        if size_bytes > self._config.max_upload_bytes:
            size_mb = size_bytes / (1024 * 1024)
            max_mb = self._config.max_upload_bytes / (1024 * 1024)
            raise ValidationError(
                f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({max_mb:.0f}MB)"
            )

    def start_upload(
        self,
        file_bytes: bytes,
        filename: str,
        size_bytes: int | None = None,
        content_type: str | None = None,
    ) -> str:
        """Validate a file and start uploading it in the background.

        Must be called from a running event loop. The remote call is never
        cancelled once issued.

        Args:
            file_bytes: Raw document content.
            filename: Original filename.
            size_bytes: Declared size. The larger of this and
                ``len(file_bytes)`` is validated and recorded.
            content_type: MIME type reported by the picker, if any.

        Returns:
            The new attempt id.

        Raises:
            ValidationError: File rejected; no attempt is created.
            UploadInProgressError: Uploads are serialized and one is running.
        """
        # A declared size never hides a larger payload
        size = len(file_bytes) if size_bytes is None else max(size_bytes, len(file_bytes))
        self.validate_document(filename, size, content_type)

        if self._config.serialize_uploads and self.is_busy:
            raise UploadInProgressError("Another upload is still in progress")

        loop = asyncio.get_running_loop()
        attempt = Attempt(
            id=uuid.uuid4().hex,
            filename=filename,
            size_bytes=size,
            started_at=datetime.now(),
        )
        self._attempts[attempt.id] = attempt
        self._started[attempt.id] = self._clock()
        self._inflight[attempt.id] = loop.create_task(
            self._run(attempt.id, file_bytes, content_type or PDF_CONTENT_TYPE),
            name=f"upload-{attempt.id}",
        )
        self._ensure_pulse(loop)

        logger.info(f"Upload {attempt.id} started: {filename} ({size} bytes)")
        self._notify()
        return attempt.id

    def start_from_selection(self, selection: FileSelection) -> str | None:
        """Start an upload for the file a picker produced, if any.

        Returns:
            The new attempt id, or None when nothing was picked.

        Raises:
            ValidationError: File rejected; no attempt is created.
            UploadInProgressError: Uploads are serialized and one is running.
        """
        for picked in selection:
            return self.start_upload(
                picked.content, picked.name, picked.size, picked.content_type
            )
        return None

    def remove_from_view(self, attempt_id: str) -> None:
        """Hide an attempt from ``visible_attempts``.

        The attempt keeps running and still resolves to a terminal status.

        Raises:
            KeyError: Unknown attempt id.
        """
        if attempt_id not in self._attempts:
            raise KeyError(attempt_id)
        if attempt_id in self._hidden:
            return
        self._hidden.add(attempt_id)
        self._notify()

    async def wait(self, attempt_id: str) -> Attempt:
        """Wait for an attempt to resolve and return its final record.

        Cancelling the waiter does not cancel the upload.
        """
        task = self._inflight.get(attempt_id)
        if task is not None:
            await asyncio.shield(task)
        return self._attempts[attempt_id]

    async def join(self) -> None:
        """Wait until no upload is in flight and the progress pulse has stopped."""
        while self._inflight:
            await asyncio.shield(asyncio.gather(*self._inflight.values()))
        if self._pulse_task is not None:
            await self._pulse_task

    # === Internals ===

    async def _run(self, attempt_id: str, file_bytes: bytes, content_type: str) -> None:
        filename = self._attempts[attempt_id].filename
        try:
            await self._client.submit_document(file_bytes, filename, content_type)
        except ClientError as e:
            logger.warning(f"Upload {attempt_id} ({filename}) failed: {e}")
            self._finish(attempt_id, AttemptStatus.FAILED, str(e))
        except Exception as e:
            logger.exception(f"Upload {attempt_id} ({filename}) failed unexpectedly")
            self._finish(attempt_id, AttemptStatus.FAILED, f"Unexpected error: {e}")
        else:
            logger.info(f"Upload {attempt_id} ({filename}) succeeded")
            self._finish(attempt_id, AttemptStatus.SUCCEEDED)
        finally:
            self._inflight.pop(attempt_id, None)
            self._notify()

    def _finish(self, attempt_id: str, status: AttemptStatus, error: str | None = None) -> None:
        current = self._attempts[attempt_id]
        if current.status.is_terminal:
            return
        self._attempts[attempt_id] = current.model_copy(update={"status": status, "error": error})

    def _ensure_pulse(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._pulse_task is None or self._pulse_task.done():
            self._pulse_task = loop.create_task(self._pulse(), name="upload-progress")

    async def _pulse(self) -> None:
        # Wakes on the interval or as soon as any upload resolves
        while self._inflight:
            await asyncio.wait(
                list(self._inflight.values()),
                timeout=self._config.progress_interval,
                return_when=asyncio.FIRST_COMPLETED,
            )
            self._notify()
