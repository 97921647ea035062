"""Test utilities for perch servers::

    from perch.testing import TestClient
"""

from perch.testing.client import TestClient

__all__ = ["TestClient"]
