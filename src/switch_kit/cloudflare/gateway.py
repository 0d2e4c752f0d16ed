"""CloudflareKV — thin request builder for the Workers KV REST API.

Each method maps to exactly one endpoint and returns the raw
:class:`httpx.Response`.  Status codes and bodies are not interpreted,
nothing is retried and nothing is cached; that is the adaptor's job.

API reference: https://developers.cloudflare.com/api/resources/kv/
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Literal
from urllib.parse import quote

import httpx

from switch_kit.cloudflare.schema import BulkWriteEntry
from switch_kit.cloudflare.settings import DEFAULT_API_BASE_URL, CloudflareKVSettings

Direction = Literal["asc", "desc"]
NamespaceOrder = Literal["id", "title"]


def quote_key(key: str) -> str:
    """Percent-encode a key for use as a single URL path segment.

    Matches JavaScript's ``encodeURIComponent`` so that keys written by
    other Cloudflare clients resolve to the same path.
    """
    return quote(key, safe="!~*'()")


class CloudflareKV:
    """Stateless client for a single Cloudflare account's KV namespaces.

    Parameters:
        auth_token: Bearer token sent on every request.
        account_id: Cloudflare account identifier.
        api_base_url: REST API root.  Defaults to the public v4 API.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
            in tests.  ``None`` uses the default network transport.
    """

    def __init__(
        self,
        *,
        auth_token: str,
        account_id: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth_token = auth_token
        self._account_id = account_id
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: CloudflareKVSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> CloudflareKV:
        return cls(
            auth_token=settings.auth_token,
            account_id=settings.account_id,
            api_base_url=settings.api_base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def namespaces_url(self) -> str:
        return f"{self._api_base_url}/accounts/{self._account_id}/storage/kv/namespaces"

    # ── namespaces ───────────────────────────────────────────

    async def list_namespaces(
        self,
        direction: Direction | None = None,
        order: NamespaceOrder | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> httpx.Response:
        params = _drop_none(
            {"direction": direction, "order": order, "page": page, "per_page": per_page}
        )
        return await self._request("GET", self.namespaces_url, params=params)

    async def create_namespace(self, title: str) -> httpx.Response:
        _require(title=title)
        return await self._request("POST", self.namespaces_url, body={"title": title})

    async def remove_namespace(self, namespace_id: str) -> httpx.Response:
        _require(namespace_id=namespace_id)
        return await self._request("DELETE", f"{self.namespaces_url}/{namespace_id}")

    async def rename_namespace(self, namespace_id: str, title: str) -> httpx.Response:
        _require(namespace_id=namespace_id, title=title)
        return await self._request(
            "PUT", f"{self.namespaces_url}/{namespace_id}", body={"title": title}
        )

    # ── bulk ─────────────────────────────────────────────────

    async def delete_keys(self, namespace_id: str, keys: Sequence[str]) -> httpx.Response:
        _require(namespace_id=namespace_id)
        return await self._request(
            "DELETE", f"{self.namespaces_url}/{namespace_id}/bulk", body=list(keys)
        )

    async def bulk_write(
        self,
        namespace_id: str,
        entries: Sequence[BulkWriteEntry | dict[str, Any]],
    ) -> httpx.Response:
        _require(namespace_id=namespace_id)
        body = [
            BulkWriteEntry.model_validate(entry).model_dump(exclude_none=True)
            for entry in entries
        ]
        return await self._request(
            "PUT", f"{self.namespaces_url}/{namespace_id}/bulk", body=body
        )

    # ── keys ─────────────────────────────────────────────────

    async def list_keys(
        self,
        namespace_id: str,
        cursor: str | None = None,
        limit: int | None = None,
        prefix: str | None = None,
    ) -> httpx.Response:
        _require(namespace_id=namespace_id)
        params = _drop_none({"cursor": cursor, "limit": limit, "prefix": prefix})
        return await self._request(
            "GET", f"{self.namespaces_url}/{namespace_id}/keys", params=params
        )

    async def read_metadata(self, namespace_id: str, key: str) -> httpx.Response:
        _require(namespace_id=namespace_id, key=key)
        return await self._request(
            "GET", f"{self.namespaces_url}/{namespace_id}/metadata/{quote_key(key)}"
        )

    async def read_key(self, namespace_id: str, key: str) -> httpx.Response:
        _require(namespace_id=namespace_id, key=key)
        return await self._request(
            "GET", f"{self.namespaces_url}/{namespace_id}/values/{quote_key(key)}"
        )

    async def delete_key(self, namespace_id: str, key: str) -> httpx.Response:
        _require(namespace_id=namespace_id, key=key)
        return await self._request(
            "DELETE", f"{self.namespaces_url}/{namespace_id}/values/{quote_key(key)}"
        )

    async def write_key_with_metadata(
        self,
        namespace_id: str,
        key: str,
        value: str,
        metadata: dict[str, Any],
    ) -> httpx.Response:
        """Write a value and its metadata as one multipart form request."""
        _require(namespace_id=namespace_id, key=key)
        # (None, text) tuples render as plain form fields without a filename
        files = {
            "value": (None, value),
            "metadata": (None, json.dumps(metadata)),
        }
        return await self._request(
            "PUT",
            f"{self.namespaces_url}/{namespace_id}/values/{quote_key(key)}",
            files=files,
        )

    # ── transport ────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._auth_token}"}
        if files is None:
            # multipart requests let httpx set the boundary content type
            headers["Content-Type"] = "application/json"
        content = json.dumps(body) if body is not None else None

        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            return await client.request(
                method,
                url,
                params=params or None,
                content=content,
                files=files,
                headers=headers,
            )


def _drop_none(params: dict[str, Any]) -> dict[str, Any]:
    return {name: value for name, value in params.items() if value is not None}


def _require(**values: str) -> None:
    for name, value in values.items():
        if not value:
            raise ValueError(f"{name} must be a non-empty string")
