"""SwitchKit — the cached, public-facing switch client."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, TypeVar

from switch_kit.adaptors.memory import InMemoryAdaptor
from switch_kit.exceptions import NotInitializedError, SwitchKitError
from switch_kit.result import AdaptorResult
from switch_kit.switch import Switch

if TYPE_CHECKING:
    from switch_kit.adaptors.base import StorageAdaptor
    from switch_kit.switch import SwitchMetadata

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SwitchKit:
    """Reads and writes switches through a storage adaptor, caching reads.

    * ``init`` must succeed before ``get``/``set``; calling them earlier
      raises :class:`NotInitializedError`.
    * Reads are cache-aside: a cached switch is returned without contacting
      the adaptor, and never expires.  ``clear_cache`` drops everything.
    * Writes are write-through: after the adaptor confirms, the cache holds
      exactly what the caller wrote.
    * Adaptor failures and missing switches are logged and degrade to
      ``None`` / no-op.

    Parameters:
        adaptor: Backend satisfying :class:`StorageAdaptor`.  Defaults to
                 :class:`InMemoryAdaptor` when omitted.
    """

    def __init__(self, adaptor: StorageAdaptor | None = None) -> None:
        self._adaptor: StorageAdaptor = adaptor or InMemoryAdaptor()
        self._cache: dict[str, Switch] = {}
        self._initialized = False

    # ── lifecycle ────────────────────────────────────────────

    async def init(self) -> None:
        """Initialize the adaptor.  Failures are logged; call again to retry."""
        if self._initialized:
            return
        result = await self._call(self._adaptor.init())
        if not result.ok:
            logger.error("Failed to initialize SwitchKit client: %s", _describe(result))
            return
        self._initialized = True

    # ── switches ─────────────────────────────────────────────

    async def get(self, key: str) -> Switch | None:
        """Return the switch stored under ``key``, or ``None`` if unavailable."""
        self._require_initialized()
        if key in self._cache:
            return self._cache[key]

        result = await self._call(self._adaptor.get(key))
        if not result.ok:
            logger.error('Unable to get switch "%s": %s', key, _describe(result))
            return None
        if result.value is None:
            logger.error('Unable to get switch "%s": not found', key)
            return None
        self._cache[key] = result.value
        return result.value

    async def set(
        self,
        key: str,
        value: str,
        metadata: SwitchMetadata | None = None,
    ) -> None:
        """Write a switch and, once the adaptor confirms, cache it."""
        self._require_initialized()
        metadata = dict(metadata) if metadata is not None else {}

        result = await self._call(self._adaptor.set(key, value, metadata))
        if not result.ok:
            # TODO: offer a set variant that returns the failure to the caller
            logger.error("Unable to set switch: %s\n\n%s", key, _describe(result))
            return
        self._cache[key] = Switch(value=value, metadata=metadata)

    def clear_cache(self) -> None:
        """Drop every cached switch.  Does not affect initialization."""
        self._cache.clear()

    # ── introspection ────────────────────────────────────────

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def adaptor(self) -> StorageAdaptor:
        return self._adaptor

    def cached_keys(self) -> list[str]:
        """Return the keys currently held in the cache."""
        return list(self._cache)

    # ── internals ────────────────────────────────────────────

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError()

    @staticmethod
    async def _call(operation: Awaitable[AdaptorResult[T]]) -> AdaptorResult[T]:
        """Await an adaptor operation, folding raised errors into a failure.

        Adaptors are expected to return failures, but third-party ones may
        raise instead, or return bare values.  The not-initialized
        precondition always propagates.
        """
        try:
            outcome = await operation
            if not isinstance(outcome, AdaptorResult):
                return AdaptorResult.success(outcome)
            return outcome
        except NotInitializedError:
            raise
        except SwitchKitError as e:
            return AdaptorResult.failure(e)
        except Exception as e:
            return AdaptorResult.failure(SwitchKitError(f"{type(e).__name__}: {e}"))


def _describe(result: AdaptorResult[Any]) -> str:
    return result.error.describe() if result.error is not None else "unknown error"
