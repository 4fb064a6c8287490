"""Test utilities for mhs applications.

::

    from mhs.testing import TestClient
"""

from mhs.testing.client import TestClient

__all__ = ["TestClient"]
