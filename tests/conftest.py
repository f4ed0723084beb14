"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - client_config: Deterministic ClientConfig independent of the environment
    - stub_backend: In-process FastAPI stand-in for the indexing service
    - network_client: NetworkClient wired to the stub backend over ASGITransport
"""

from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi import FastAPI, Query, Response, UploadFile
from fastapi.responses import JSONResponse
from httpx import ASGITransport

from docchat.client.network import NetworkClient
from docchat.config import ClientConfig

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF"


@dataclass
class StubBackend:
    """Configurable fake of the remote indexing/chat service.

    Attributes:
        chat_status: Status code returned by GET /chat.
        chat_body: JSON-serializable body, or raw string for malformed replies.
        upload_status: Status code returned by POST /upload/pdf.
        questions: Every ``message`` query value received.
        uploads: (filename, content) of every upload received.
    """

    chat_status: int = 200
    chat_body: Any = field(default_factory=lambda: {"message": "42", "docs": []})
    upload_status: int = 200
    questions: list[str] = field(default_factory=list)
    uploads: list[tuple[str, bytes]] = field(default_factory=list)

    def build_app(self) -> FastAPI:
        app = FastAPI()

        @app.get("/chat")
        async def chat(message: str = Query(...)) -> Response:
            self.questions.append(message)
            if isinstance(self.chat_body, str):
                return Response(
                    content=self.chat_body, status_code=self.chat_status, media_type="text/plain"
                )
            return JSONResponse(content=self.chat_body, status_code=self.chat_status)

        @app.post("/upload/pdf")
        async def upload(file: UploadFile) -> Response:
            self.uploads.append((file.filename or "", await file.read()))
            return JSONResponse(content={"filename": file.filename}, status_code=self.upload_status)

        return app


@pytest.fixture
def client_config() -> ClientConfig:
    """Return a config that does not depend on environment variables."""
    return ClientConfig(
        api_base_url="http://test",
        chat_path="/chat",
        upload_path="/upload/pdf",
        upload_field_name="file",
        max_upload_bytes=1024 * 1024,
        request_timeout=5.0,
        serialize_uploads=False,
        progress_interval=0.01,
        progress_time_constant=2.0,
    )


@pytest.fixture
def stub_backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def network_client(client_config: ClientConfig, stub_backend: StubBackend) -> NetworkClient:
    """NetworkClient that talks to the stub backend in-process."""
    transport = ASGITransport(app=stub_backend.build_app())
    return NetworkClient(client_config, transport=transport)
