"""Integration tests for components working together.

The real NetworkClient and controllers talk to a FastAPI stub of the
indexing service through httpx's ASGITransport. No network is required.
"""
