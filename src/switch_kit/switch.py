"""Switch — the unit of data managed by a SwitchKit client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

SwitchMetadata = dict[str, str | int | float | bool]


@dataclass(frozen=True)
class Switch:
    """An immutable named flag value as returned to callers.

    Attributes:
        value:    Raw string value of the switch (``"on"``, ``"off"``, a
                  variant name, a JSON blob — the client does not care).
        metadata: Flat mapping of primitive scalars stored alongside the
                  value.  ``None`` means the backend returned no metadata,
                  which is distinct from an empty mapping.  The mapping is a
                  read-only view over a private copy.
    """

    value: str
    metadata: Mapping[str, str | int | float | bool] | None = None

    def __post_init__(self) -> None:
        if self.metadata is not None:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "metadata": dict(self.metadata) if self.metadata is not None else None,
        }
