"""Storage adaptors satisfying the :class:`StorageAdaptor` protocol.

``SQLiteAdaptor`` lives in :mod:`switch_kit.adaptors.sqlite` and is not
imported here because it needs the optional ``aiosqlite`` dependency.
"""

from switch_kit.adaptors.base import StorageAdaptor
from switch_kit.adaptors.memory import InMemoryAdaptor

__all__ = ["InMemoryAdaptor", "StorageAdaptor"]
