"""Shared test fixtures."""

from __future__ import annotations

import json
import math
from urllib.parse import unquote

import httpx
import pytest

from switch_kit import (
    InMemoryAdaptor,
    NamespaceResolutionError,
    Switch,
    SwitchFetchError,
    SwitchKit,
    SwitchWriteError,
)
from switch_kit.cloudflare import NAMESPACE_ALREADY_EXISTS, CloudflareKV
from switch_kit.result import AdaptorResult

ACCOUNT_ID = "account-id"
AUTH_TOKEN = "auth-token"
API_BASE_URL = "https://api.cloudflare.com/client/v4"


class CountingAdaptor:
    """In-memory adaptor that counts calls and can be told to fail."""

    def __init__(self, data: dict[str, Switch] | None = None) -> None:
        self.data: dict[str, Switch] = dict(data or {})
        self.calls: list[tuple[str, str | None]] = []
        self.fail_init = False
        self.fail_get = False
        self.fail_set = False
        self.initialized = False

    async def init(self):
        self.calls.append(("init", None))
        if self.fail_init:
            return AdaptorResult.failure(
                NamespaceResolutionError("Unable to create namespace: boom", {"errors": []})
            )
        self.initialized = True
        return AdaptorResult.success()

    async def get(self, key):
        self.calls.append(("get", key))
        if self.fail_get:
            return AdaptorResult.failure(
                SwitchFetchError("Failed to load switch value and/or metadata")
            )
        return AdaptorResult.success(self.data.get(key))

    async def set(self, key, value, metadata=None):
        self.calls.append(("set", key))
        if self.fail_set:
            return AdaptorResult.failure(SwitchWriteError("Failed to write key with metadata"))
        self.data[key] = Switch(value=value, metadata=dict(metadata or {}))
        return AdaptorResult.success()

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)


class FakeCloudflare:
    """Minimal in-process imitation of the Workers KV REST API.

    Serves requests through ``httpx.MockTransport`` and records each one.
    """

    def __init__(self, titles: list[str] | None = None, per_page: int = 20) -> None:
        self.namespaces: dict[str, str] = {}  # title -> id
        for title in titles or []:
            self.add_namespace(title)
        self.per_page = per_page
        self.values: dict[tuple[str, str], str] = {}
        self.metadata: dict[tuple[str, str], dict] = {}
        self.requests: list[httpx.Request] = []
        self.create_error_code: int | None = None
        self.fail_routes: set[str] = set()
        self.raise_routes: set[str] = set()

    def add_namespace(self, title: str) -> str:
        namespace_id = f"id-{title}"
        self.namespaces[title] = namespace_id
        return namespace_id

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def gateway(self) -> CloudflareKV:
        return CloudflareKV(
            auth_token=AUTH_TOKEN,
            account_id=ACCOUNT_ID,
            api_base_url=API_BASE_URL,
            transport=self.transport,
        )

    def requests_for(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if _route(r) == route]

    # ── request handling ─────────────────────────────────────

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = _route(request)
        if route in self.raise_routes:
            raise httpx.ConnectError("connection refused", request=request)
        if route in self.fail_routes:
            return _error(500, 10001, "internal error")

        if route == "create_namespace":
            return self._create(json.loads(request.content)["title"])
        if route == "list_namespaces":
            return self._list(request)
        if route not in ("read_key", "read_metadata", "write_key"):
            return _error(404, 7003, "No route for that URI")

        segments = _segments(request)
        namespace_id, key = segments[5], unquote(segments[7])
        if route == "read_key":
            if (namespace_id, key) not in self.values:
                return _error(404, 10009, "get: 'key not found'")
            return httpx.Response(200, text=self.values[(namespace_id, key)])
        if route == "read_metadata":
            if (namespace_id, key) not in self.values:
                return _error(404, 10009, "get: 'key not found'")
            return httpx.Response(
                200, json={"success": True, "result": self.metadata.get((namespace_id, key))}
            )
        if route == "write_key":
            form = parse_form(request)
            self.values[(namespace_id, key)] = form["value"]
            self.metadata[(namespace_id, key)] = json.loads(form["metadata"])
            return httpx.Response(200, json={"success": True, "errors": [], "result": None})
        return _error(404, 7003, "No route for that URI")

    def _create(self, title: str) -> httpx.Response:
        if self.create_error_code is not None:
            return _error(400, self.create_error_code, "create failed")
        if title in self.namespaces:
            return _error(
                400,
                NAMESPACE_ALREADY_EXISTS,
                "create namespace: 'A namespace with this account ID and title already exists.'",
            )
        namespace_id = self.add_namespace(title)
        return httpx.Response(
            200,
            json={
                "success": True,
                "errors": [],
                "messages": [],
                "result": {"id": namespace_id, "title": title, "supports_url_encoding": True},
            },
        )

    def _list(self, request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        per_page = int(request.url.params.get("per_page", str(self.per_page)))
        titles = sorted(self.namespaces)
        chunk = titles[(page - 1) * per_page : page * per_page]
        return httpx.Response(
            200,
            json={
                "success": True,
                "result": [
                    {"id": self.namespaces[t], "title": t, "supports_url_encoding": True}
                    for t in chunk
                ],
                "result_info": {
                    "page": page,
                    "per_page": per_page,
                    "count": len(chunk),
                    "total_count": len(titles),
                    "total_pages": max(1, math.ceil(len(titles) / per_page)),
                },
            },
        )


def _segments(request: httpx.Request) -> list[str]:
    # /client/v4/accounts/{account}/storage/kv/namespaces/{id}/{kind}/{key}
    raw = request.url.raw_path.decode().split("?")[0]
    return raw.split("/")[3:]


def _route(request: httpx.Request) -> str:
    segments = _segments(request)
    if len(segments) == 5:
        return "create_namespace" if request.method == "POST" else "list_namespaces"
    kind = segments[6] if len(segments) > 6 else ""
    if kind == "values":
        return {"GET": "read_key", "PUT": "write_key", "DELETE": "delete_key"}[request.method]
    if kind == "metadata":
        return "read_metadata"
    return kind or "namespace"


def _error(status: int, code: int, message: str) -> httpx.Response:
    return httpx.Response(
        status,
        json={"success": False, "errors": [{"code": code, "message": message}], "messages": []},
    )


def parse_form(request: httpx.Request) -> dict[str, str]:
    """Decode the text fields of a multipart/form-data request."""
    boundary = request.headers["content-type"].split("boundary=")[1].encode()
    fields: dict[str, str] = {}
    for part in request.content.split(b"--" + boundary):
        if b'name="' not in part:
            continue
        head, _, body = part.partition(b"\r\n\r\n")
        name = head.split(b'name="')[1].split(b'"')[0].decode()
        fields[name] = body.removesuffix(b"\r\n").decode()
    return fields


@pytest.fixture
def adaptor():
    return CountingAdaptor(
        {"key": Switch(value="value", metadata={"key": "value"})},
    )


@pytest.fixture
def client(adaptor):
    return SwitchKit(adaptor)


@pytest.fixture
def memory_client():
    return SwitchKit(InMemoryAdaptor())


@pytest.fixture
def cloudflare():
    return FakeCloudflare()
