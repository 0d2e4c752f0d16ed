"""AdaptorResult — the outcome of a single storage adaptor operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from switch_kit.exceptions import SwitchKitError

T = TypeVar("T")


@dataclass(frozen=True)
class AdaptorResult(Generic[T]):
    """Immutable result returned by every storage adaptor operation.

    Adaptors report backend failures through this type instead of raising,
    so the client can log the diagnostic payload and degrade gracefully.

    Attributes:
        ok:    ``True`` if the operation succeeded.
        value: Operation output on success (``None`` for ``init``/``set``,
               and for a ``get`` that found nothing).
        error: The failure on ``ok=False``.
    """

    ok: bool
    value: T | None = None
    error: SwitchKitError | None = None

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def success(value: T | None = None) -> AdaptorResult[T]:
        return AdaptorResult(ok=True, value=value)

    @staticmethod
    def failure(error: SwitchKitError) -> AdaptorResult[T]:
        return AdaptorResult(ok=False, error=error)
