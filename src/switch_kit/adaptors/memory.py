"""InMemoryAdaptor — zero-config, dict-backed adaptor for development and testing."""

from __future__ import annotations

from collections.abc import Mapping

from switch_kit.exceptions import NotInitializedError
from switch_kit.result import AdaptorResult
from switch_kit.switch import Switch, SwitchMetadata


class InMemoryAdaptor:
    """In-memory adaptor using a plain dict.  Data is lost on process exit.

    Parameters:
        initial: Optional seed switches available right after ``init``.
    """

    def __init__(self, initial: Mapping[str, Switch] | None = None) -> None:
        self._data: dict[str, Switch] = dict(initial or {})
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def init(self) -> AdaptorResult[None]:
        self._initialized = True
        return AdaptorResult.success()

    async def get(self, key: str) -> AdaptorResult[Switch]:
        self._require_initialized()
        return AdaptorResult.success(self._data.get(key))

    async def set(
        self,
        key: str,
        value: str,
        metadata: SwitchMetadata | None = None,
    ) -> AdaptorResult[None]:
        self._require_initialized()
        self._data[key] = Switch(value=value, metadata=dict(metadata or {}))
        return AdaptorResult.success()

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError()
