"""Test utilities for trellis route tables.

    from trellis.testing import TestClient
"""

from trellis.testing.client import TestClient, TestResponse

__all__ = [
    "TestClient",
    "TestResponse",
]
