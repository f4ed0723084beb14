"""Stateless HTTP client for the indexing service.

Two calls, no retries and no caching. Every transport, status and decoding
failure is translated into the ``ClientError`` taxonomy so callers handle one
family of exceptions.
"""

import logging

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError

from docchat.config import PDF_CONTENT_TYPE, ClientConfig, get_client_config
from docchat.errors import DecodeError, RemoteError, TransportError
from docchat.models.schemas import ChatReplyPayload

logger = logging.getLogger(__name__)


class UploadReceipt(BaseModel):
    """Outcome of an accepted upload. Only the status code is contractual."""

    filename: str
    status_code: int


class NetworkClient:
    """Wrapper around the upload and chat endpoints.

    A fresh ``httpx.AsyncClient`` is opened per call, so an instance holds
    no connection state and can be shared by any number of controllers.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, e.g. ``ASGITransport`` in tests.
        """
        self._config = config or get_client_config()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _open(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.request_timeout, transport=self._transport)

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        async with self._open() as client:
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise RemoteError(e.response.status_code, e.response.reason_phrase) from e
            except httpx.RequestError as e:
                raise TransportError(f"Connection failed: {e!r}") from e
        return response

    async def submit_document(
        self,
        file_bytes: bytes,
        filename: str,
        content_type: str = PDF_CONTENT_TYPE,
    ) -> UploadReceipt:
        """Upload a document as multipart form data.

        Args:
            file_bytes: Raw document content.
            filename: Filename reported to the service.
            content_type: MIME type of the part.

        Returns:
            UploadReceipt with the success status code.

        Raises:
            TransportError: Network failure or timeout.
            RemoteError: Non-success status code.
        """
        files = {self._config.upload_field_name: (filename, file_bytes, content_type)}
        response = await self._send("POST", self._config.upload_url, files=files)
        logger.info(f"Uploaded {filename} ({len(file_bytes)} bytes): HTTP {response.status_code}")
        return UploadReceipt(filename=filename, status_code=response.status_code)

    async def ask(self, question: str) -> ChatReplyPayload:
        """Send a question and decode the answer.

        Args:
            question: The user's question, passed as the ``message`` query param.

        Returns:
            Decoded chat reply with answer text and source chunks.

        Raises:
            TransportError: Network failure or timeout.
            RemoteError: Non-success status code.
            DecodeError: Body is not JSON or lacks the expected fields.
        """
        response = await self._send("GET", self._config.chat_url, params={"message": question})
        try:
            return ChatReplyPayload.model_validate_json(response.content)
        except PayloadValidationError as e:
            raise DecodeError(f"Malformed chat response: {e.error_count()} error(s)") from e
