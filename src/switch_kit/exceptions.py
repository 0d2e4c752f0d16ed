"""Custom exceptions for the switch_kit package."""

from __future__ import annotations

import json
from typing import Any


class SwitchKitError(Exception):
    """Base exception for all switch_kit errors.

    Attributes:
        message: Human-readable error message.
        payload: Diagnostic body attached to the error, usually the parsed
                 backend error envelope (``{"errors": [...]}``).
    """

    def __init__(self, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload: dict[str, Any] = payload or {}

    def describe(self) -> str:
        """Return the message followed by the pretty-printed payload."""
        if not self.payload:
            return self.message
        return f"{self.message}\n\n{json.dumps(self.payload, indent=2, default=str)}"


class NotInitializedError(SwitchKitError):
    """Raised when ``get``/``set`` is called before a successful ``init``."""

    def __init__(self, message: str = "SwitchKit is not initialized. Call `init` method first!") -> None:
        super().__init__(message)


class NamespaceResolutionError(SwitchKitError):
    """The namespace could neither be created nor discovered."""


class SwitchFetchError(SwitchKitError):
    """Reading a switch value and/or its metadata failed."""


class SwitchWriteError(SwitchKitError):
    """Writing a switch value with its metadata failed."""
