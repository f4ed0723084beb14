"""Client configuration with environment variable loading.

Pydantic-based configuration for the upload and chat controllers.
Endpoints point at any service that speaks the chat/upload contract.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB
PDF_CONTENT_TYPE = "application/pdf"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class ClientConfig(BaseModel):
    """Configuration for the document chat client.

    Attributes:
        api_base_url: Base URL of the indexing service.
        chat_path: Path of the chat endpoint (GET, ``message`` query param).
        upload_path: Path of the upload endpoint (multipart POST).
        upload_field_name: Multipart field carrying the file.
        max_upload_bytes: Largest file accepted for upload.
        allowed_extensions: Recognized document extensions (lowercase, with dot).
        allowed_content_types: Recognized MIME types for picked or dropped files.
        request_timeout: Transport timeout in seconds.
        serialize_uploads: Reject a new upload while another is running.
        progress_interval: Seconds between progress refresh notifications.
        progress_time_constant: Time constant of the simulated progress curve.
    """

    # Environment-sourced defaults go through the same validators
    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Base URL of the indexing service",
    )
    chat_path: str = Field(
        default_factory=lambda: os.getenv("CHAT_PATH", "/chat"),
        description="Chat endpoint path",
    )
    upload_path: str = Field(
        default_factory=lambda: os.getenv("UPLOAD_PATH", "/upload/pdf"),
        description="Upload endpoint path",
    )
    upload_field_name: str = Field(
        default_factory=lambda: os.getenv("UPLOAD_FIELD_NAME", "file"),
        min_length=1,
        description="Multipart form field name for the uploaded file",
    )
    max_upload_bytes: int = Field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))),
        ge=1,
        description="Maximum accepted file size in bytes",
    )
    allowed_extensions: tuple[str, ...] = Field(
        default=(".pdf",),
        description="Recognized document extensions",
    )
    allowed_content_types: tuple[str, ...] = Field(
        default=(PDF_CONTENT_TYPE,),
        description="Recognized document MIME types",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120")),
        gt=0.0,
        description="Transport timeout in seconds",
    )
    serialize_uploads: bool = Field(
        default_factory=lambda: _env_bool("SERIALIZE_UPLOADS", False),
        description="Allow only one upload in flight at a time",
    )
    progress_interval: float = Field(
        default_factory=lambda: float(os.getenv("PROGRESS_INTERVAL", "0.2")),
        gt=0.0,
        le=10.0,
        description="Seconds between progress refreshes",
    )
    progress_time_constant: float = Field(
        default_factory=lambda: float(os.getenv("PROGRESS_TIME_CONSTANT", "2.0")),
        gt=0.0,
        description="Time constant of the simulated progress curve",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("chat_path", "upload_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Normalize endpoint paths to start with a slash."""
        v = v.strip()
        if not v:
            raise ValueError("Endpoint path must not be empty")
        return v if v.startswith("/") else f"/{v}"

    @field_validator("allowed_extensions")
    @classmethod
    def normalize_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase extensions and make sure each has a leading dot."""
        if not v:
            raise ValueError("At least one document extension is required")
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in (e.lower() for e in v))

    @property
    def chat_url(self) -> str:
        return f"{self.api_base_url}{self.chat_path}"

    @property
    def upload_url(self) -> str:
        return f"{self.api_base_url}{self.upload_path}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is malformed.
    """
    return ClientConfig()
