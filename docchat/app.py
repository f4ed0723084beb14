"""FastAPI application factory hosting the NiceGUI interface.

The chat UI is mounted onto this app by ``main.py``; the app itself only
adds lifecycle logging, CORS and a health route.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat import __version__
from docchat.config import ClientConfig, get_client_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup and shutdown of the client app."""
    config: ClientConfig = app.state.client_config
    logger.info(f"Starting PDF Chat client (indexing service: {config.api_base_url})")
    yield
    logger.info("Shutting down PDF Chat client...")


def create_app(config: ClientConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Optional client configuration.
                Loads from environment if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="PDF Chat AI",
        description="Upload PDFs and chat with your documents.",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.client_config = config or get_client_config()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check client health and report the configured service."""
        return {
            "status": "healthy",
            "service": "docchat",
            "api_base_url": application.state.client_config.api_base_url,
        }

    return application
