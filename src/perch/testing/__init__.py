"""Test utilities for perch filters.

    from perch.testing import TestClient
"""

from perch.testing.client import TestClient

__all__ = ["TestClient"]
