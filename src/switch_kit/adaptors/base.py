"""StorageAdaptor protocol — the capability contract every backend satisfies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from switch_kit.result import AdaptorResult
    from switch_kit.switch import Switch, SwitchMetadata


@runtime_checkable
class StorageAdaptor(Protocol):
    """Minimal surface the :class:`~switch_kit.client.SwitchKit` client needs.

    Any object with these three coroutines is a valid adaptor; there is no
    base class to inherit from.  Backend failures are reported as failed
    :class:`AdaptorResult` values.  Calling ``get``/``set`` before a
    successful ``init`` raises :class:`~switch_kit.exceptions.NotInitializedError`.
    """

    async def init(self) -> AdaptorResult[None]:
        """Prepare the backend.  Must be a no-op once it has succeeded."""
        ...

    async def get(self, key: str) -> AdaptorResult[Switch]:
        """Fetch a switch.  A successful result with ``value=None`` means not found."""
        ...

    async def set(
        self,
        key: str,
        value: str,
        metadata: SwitchMetadata | None = None,
    ) -> AdaptorResult[None]:
        """Create or overwrite a switch.  ``metadata`` defaults to ``{}``."""
        ...
