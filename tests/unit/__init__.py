"""Unit tests for individual components in isolation.

Coverage:
    - session/: Upload and chat state machines, progress, picker, store
    - models/: Pydantic validation and excerpt helpers
    - config: Environment defaults and validators

Remote calls are replaced by small in-memory fakes.
"""
