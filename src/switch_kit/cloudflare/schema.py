"""Pydantic models for the Cloudflare Workers KV REST API.

Only the fields the adaptor relies on are modelled; unknown fields are
ignored so that additions to the API do not break parsing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from switch_kit.switch import SwitchMetadata

# Error code returned by the create-namespace endpoint when a namespace with
# the same title already exists.
NAMESPACE_ALREADY_EXISTS = 10014

UNKNOWN_ERROR_PAYLOAD: dict[str, Any] = {"errors": [{"code": 0, "message": "unknown"}]}


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CloudflareMessage(_Envelope):
    """Single entry of the ``errors``/``messages`` arrays."""

    code: int = 0
    message: str = ""


class ErrorEnvelope(_Envelope):
    """Body of a non-success response."""

    errors: list[CloudflareMessage] = Field(default_factory=list)
    messages: list[CloudflareMessage] = Field(default_factory=list)
    success: bool = False

    def is_conflict(self) -> bool:
        """``True`` when every reported error is the "already exists" code."""
        return bool(self.errors) and all(
            error.code == NAMESPACE_ALREADY_EXISTS for error in self.errors
        )


class NamespaceRecord(_Envelope):
    """A KV namespace as listed or created.

    Attributes:
        id: Opaque backend-assigned namespace identifier
        title: Human readable namespace title
        supports_url_encoding: Whether keys in the namespace are URL-decoded
    """

    id: str
    title: str
    supports_url_encoding: bool | None = None


class ResultInfo(_Envelope):
    """Pagination block of a list response."""

    page: int = 1
    per_page: int = 20
    count: int = 0
    total_count: int = 0
    total_pages: int = 1


class ListNamespacesResponse(_Envelope):
    result: list[NamespaceRecord] | None = None
    result_info: ResultInfo | None = None


class CreateNamespaceResponse(_Envelope):
    result: NamespaceRecord


class MetadataResponse(_Envelope):
    result: SwitchMetadata | None = None


class BulkWriteEntry(BaseModel):
    """One key/value pair of a bulk write.

    Attributes:
        key: Key name (max 512 bytes)
        value: Value to store
        base64: Whether ``value`` is base64 encoded binary data
        expiration: Absolute expiry as seconds since the epoch
        expiration_ttl: Relative expiry in seconds from now
        metadata: Arbitrary JSON-serializable metadata
    """

    key: str
    value: str
    base64: bool | None = None
    expiration: int | None = None
    expiration_ttl: int | None = None
    metadata: dict[str, Any] | None = None
