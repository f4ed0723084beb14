"""Test package for the PDF Chat client.

Structure:
    - unit/: Controllers and pure logic against stub clients
    - integration/: Real NetworkClient against an in-process stub service

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
