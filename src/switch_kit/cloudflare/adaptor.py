"""CloudflareKVAdaptor — stores switches in a Cloudflare Workers KV namespace."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from switch_kit.cloudflare.gateway import CloudflareKV
from switch_kit.cloudflare.schema import (
    UNKNOWN_ERROR_PAYLOAD,
    CreateNamespaceResponse,
    ErrorEnvelope,
    ListNamespacesResponse,
    MetadataResponse,
    NamespaceRecord,
)
from switch_kit.cloudflare.settings import CloudflareKVSettings
from switch_kit.exceptions import (
    NamespaceResolutionError,
    NotInitializedError,
    SwitchFetchError,
    SwitchWriteError,
)
from switch_kit.result import AdaptorResult
from switch_kit.switch import Switch, SwitchMetadata

logger = logging.getLogger(__name__)


class CloudflareKVAdaptor:
    """Storage adaptor mapping one SwitchKit namespace onto a KV namespace.

    The namespace is addressed by its *title*; ``init`` resolves the title to
    the opaque namespace id Cloudflare assigned to it.  Creating the
    namespace is attempted first (covers the very first run).  When
    Cloudflare answers that the title already exists, the namespace list is
    paged through in ascending title order until the title is found.

    Parameters:
        namespace: Title of the KV namespace holding the switches.
        gateway: Ready :class:`CloudflareKV` client.  When omitted one is
            built from ``settings`` (or from the environment).
        settings: Connection settings used when ``gateway`` is omitted.

    Example:
        >>> adaptor = CloudflareKVAdaptor(
        ...     namespace="my-switches",
        ...     settings=CloudflareKVSettings.from_env(),
        ... )
        >>> client = SwitchKit(adaptor)
        >>> await client.init()
        >>> switch = await client.get("switch-a")
    """

    def __init__(
        self,
        namespace: str,
        *,
        gateway: CloudflareKV | None = None,
        settings: CloudflareKVSettings | None = None,
    ) -> None:
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        if gateway is None:
            gateway = CloudflareKV.from_settings(settings or CloudflareKVSettings.from_env())
        self._gateway = gateway
        self._namespace = namespace
        self._namespace_id: str | None = None
        self._initialized = False

    @property
    def gateway(self) -> CloudflareKV:
        return self._gateway

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def namespace_id(self) -> str | None:
        return self._namespace_id

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ── StorageAdaptor protocol ──────────────────────────────

    async def init(self) -> AdaptorResult[None]:
        """Resolve the namespace title to its id, creating it if needed."""
        if self._initialized:
            return AdaptorResult.success()

        try:
            response = await self._gateway.create_namespace(self._namespace)
        except (httpx.HTTPError, ValueError) as e:
            return AdaptorResult.failure(
                NamespaceResolutionError(
                    f"Unable to create namespace: {e}", _transport_payload(e)
                )
            )

        if response.is_success:
            try:
                record = CreateNamespaceResponse.model_validate_json(response.content).result
            except ValidationError as e:
                return AdaptorResult.failure(
                    NamespaceResolutionError(
                        "Unable to read the created namespace from the response",
                        _transport_payload(e),
                    )
                )
            logger.debug("Created namespace %s with id %s", self._namespace, record.id)
            self._resolve(record)
            return AdaptorResult.success()

        payload = _error_payload(response)
        envelope = _parse_envelope(payload)
        if envelope is None or not envelope.is_conflict():
            return AdaptorResult.failure(
                NamespaceResolutionError(
                    f"Unable to create namespace: {response.reason_phrase}", payload
                )
            )

        logger.debug("Namespace %s already exists, searching for it", self._namespace)
        try:
            record = await self._find_namespace()
        except NamespaceResolutionError as e:
            return AdaptorResult.failure(e)
        self._resolve(record)
        return AdaptorResult.success()

    async def get(self, key: str) -> AdaptorResult[Switch]:
        """Fetch the value and metadata of ``key`` concurrently.

        Both requests always run to completion.  The switch is only returned
        when both succeed; otherwise the errors of every failed request are
        collected into one :class:`SwitchFetchError`.
        """
        namespace_id = self._require_namespace_id()

        value_result, metadata_result = await asyncio.gather(
            self._gateway.read_key(namespace_id, key),
            self._gateway.read_metadata(namespace_id, key),
            return_exceptions=True,
        )

        failed = False
        errors: list[Any] = []
        for outcome in (value_result, metadata_result):
            if isinstance(outcome, BaseException):
                failed = True
                errors.append({"code": 0, "message": str(outcome) or type(outcome).__name__})
            elif not outcome.is_success:
                failed = True
                try:
                    errors.extend(outcome.json().get("errors") or [])
                except (ValueError, AttributeError):
                    pass

        if failed:
            return AdaptorResult.failure(
                SwitchFetchError(
                    "Failed to load switch value and/or metadata", {"errors": errors}
                )
            )

        try:
            metadata = MetadataResponse.model_validate_json(metadata_result.content).result
        except ValidationError as e:
            return AdaptorResult.failure(
                SwitchFetchError(
                    "Failed to load switch value and/or metadata", _transport_payload(e)
                )
            )
        return AdaptorResult.success(Switch(value=value_result.text, metadata=metadata))

    async def set(
        self,
        key: str,
        value: str,
        metadata: SwitchMetadata | None = None,
    ) -> AdaptorResult[None]:
        """Write ``value`` and ``metadata`` (default ``{}``) under ``key``."""
        namespace_id = self._require_namespace_id()
        try:
            response = await self._gateway.write_key_with_metadata(
                namespace_id, key, value, dict(metadata or {})
            )
        except (httpx.HTTPError, ValueError) as e:
            return AdaptorResult.failure(
                SwitchWriteError("Failed to write key with metadata", _transport_payload(e))
            )
        if not response.is_success:
            return AdaptorResult.failure(
                SwitchWriteError("Failed to write key with metadata", _error_payload(response))
            )
        return AdaptorResult.success()

    # ── namespace resolution ─────────────────────────────────

    async def _find_namespace(self) -> NamespaceRecord:
        """Page through all namespaces (ascending by title) looking for ours.

        The loop is bounded by the ``total_pages`` the backend reports.

        Raises:
            NamespaceResolutionError: If listing fails, a page carries no
                namespaces, or every page was scanned without a match.
        """
        page = 1
        while True:
            try:
                response = await self._gateway.list_namespaces(
                    direction="asc", order="title", page=page
                )
            except httpx.HTTPError as e:
                raise NamespaceResolutionError(
                    f"Unable to list namespaces: {e}", _transport_payload(e)
                ) from e
            if not response.is_success:
                raise NamespaceResolutionError(
                    f"Unable to list namespaces: {response.reason_phrase}",
                    _error_payload(response),
                )

            try:
                listing = ListNamespacesResponse.model_validate_json(response.content)
            except ValidationError:
                listing = ListNamespacesResponse()
            if not listing.result:
                raise NamespaceResolutionError("Unable to find namespaces in the response")

            for record in listing.result:
                if record.title == self._namespace:
                    logger.debug("Found namespace %s on page %d", self._namespace, page)
                    return record

            total_pages = listing.result_info.total_pages if listing.result_info else page
            if page >= total_pages:
                raise NamespaceResolutionError(f"Unable to find namespace: {self._namespace}")
            page += 1

    def _resolve(self, record: NamespaceRecord) -> None:
        self._namespace_id = record.id
        self._initialized = True

    def _require_namespace_id(self) -> str:
        if not self._initialized or not self._namespace_id:
            raise NotInitializedError()
        return self._namespace_id


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    """Best-effort parse of an error body, falling back to a placeholder."""
    try:
        payload = response.json()
    except ValueError:
        return dict(UNKNOWN_ERROR_PAYLOAD)
    if not isinstance(payload, dict):
        return dict(UNKNOWN_ERROR_PAYLOAD)
    return payload


def _parse_envelope(payload: dict[str, Any]) -> ErrorEnvelope | None:
    try:
        return ErrorEnvelope.model_validate(payload)
    except ValidationError:
        return None


def _transport_payload(error: Exception) -> dict[str, Any]:
    return {"errors": [{"code": 0, "message": str(error) or type(error).__name__}]}
