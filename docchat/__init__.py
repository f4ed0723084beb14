"""PDF Chat - upload a document to an indexing service and chat about it.

Combines httpx for the remote calls, NiceGUI for visualization,
FastAPI as the hosting shell, and Pydantic for data validation.

Components:
    - client: stateless wrapper around the upload and chat endpoints
    - session: upload and chat controllers with observable state
    - models: wire payloads and session records
    - ui: Web interface that renders controller state
"""

__version__ = "0.1.0"
