"""Error taxonomy for the chat client.

``ValidationError`` and ``UploadInProgressError`` are raised synchronously to
the caller before any network activity. ``ClientError`` subclasses come out
of the network layer and are converted by the controllers into terminal,
displayable state.
"""


class SessionError(Exception):
    """Base class for all client session errors."""


class ValidationError(SessionError):
    """Raised when a file is rejected before upload (type or size)."""


class UploadInProgressError(SessionError):
    """Raised when uploads are serialized and one is already running."""


class ClientError(SessionError):
    """Base class for failures of a remote call."""


class TransportError(ClientError):
    """Network unreachable, connection reset, or transport timeout."""


class RemoteError(ClientError):
    """The service answered with a non-success status code."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DecodeError(ClientError):
    """The response body is not the expected JSON shape."""
