"""switch_kit — cached feature switches over a pluggable key-value backend.

A :class:`SwitchKit` client wraps any :class:`StorageAdaptor`, gates use on
a successful ``init``, caches reads forever (until ``clear_cache``), writes
through on ``set``, and turns backend failures into logged ``None`` results.
"""

from switch_kit.adaptors import InMemoryAdaptor, StorageAdaptor
from switch_kit.client import SwitchKit
from switch_kit.exceptions import (
    NamespaceResolutionError,
    NotInitializedError,
    SwitchFetchError,
    SwitchKitError,
    SwitchWriteError,
)
from switch_kit.result import AdaptorResult
from switch_kit.switch import Switch, SwitchMetadata

__all__ = [
    "AdaptorResult",
    "InMemoryAdaptor",
    "NamespaceResolutionError",
    "NotInitializedError",
    "StorageAdaptor",
    "Switch",
    "SwitchFetchError",
    "SwitchKit",
    "SwitchKitError",
    "SwitchMetadata",
    "SwitchWriteError",
]
