# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Adaptor factory for creating storage adaptors from configuration.

Uses the Registry pattern to map type strings to adaptor builders,
allowing extensibility without modifying factory code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from switch_kit.adaptors import InMemoryAdaptor, StorageAdaptor
from switch_kit.cloudflare import CloudflareKVAdaptor, CloudflareKVSettings

from .schema import AdaptorConfigSchema

AdaptorBuilder = Callable[[AdaptorConfigSchema], StorageAdaptor]


class AdaptorConfigError(Exception):
    """Raised when an adaptor cannot be built from its configuration."""

    pass


def _build_memory(config: AdaptorConfigSchema) -> StorageAdaptor:
    return InMemoryAdaptor()


def _build_sqlite(config: AdaptorConfigSchema) -> StorageAdaptor:
    if not config.path:
        raise AdaptorConfigError("SQLite adaptor requires 'path' configuration")
    try:
        from switch_kit.adaptors.sqlite import SQLiteAdaptor
    except ImportError as e:
        raise AdaptorConfigError(str(e)) from e
    return SQLiteAdaptor(config.namespace, config.path)


def _build_cloudflare_kv(config: AdaptorConfigSchema) -> StorageAdaptor:
    try:
        settings = CloudflareKVSettings.from_env(
            auth_token=config.auth_token,
            account_id=config.account_id,
            api_base_url=config.api_base_url,
            timeout=config.timeout,
        )
    except ValueError as e:
        raise AdaptorConfigError(str(e)) from e
    return CloudflareKVAdaptor(config.namespace, settings=settings)


class AdaptorFactory:
    """Creates storage adaptors from configuration.

    Example:
        adaptor = AdaptorFactory.create(
            AdaptorConfigSchema(type="cloudflare_kv", namespace="my-switches")
        )
    """

    _registry: ClassVar[dict[str, AdaptorBuilder]] = {
        "memory": _build_memory,
        "sqlite": _build_sqlite,
        "cloudflare_kv": _build_cloudflare_kv,
    }

    @classmethod
    def register(cls, type_name: str, builder: AdaptorBuilder) -> None:
        """Register a custom adaptor type.

        Example:
            AdaptorFactory.register("redis", lambda cfg: RedisAdaptor(cfg.namespace))
        """
        cls._registry[type_name] = builder

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered adaptor type names."""
        return list(cls._registry.keys())

    @classmethod
    def create(cls, config: AdaptorConfigSchema) -> StorageAdaptor:
        """Build the adaptor described by ``config``.

        Raises:
            AdaptorConfigError: If the type is unknown or misconfigured
        """
        if not config.namespace:
            raise AdaptorConfigError("Adaptor requires a non-empty 'namespace'")
        builder = cls._registry.get(config.type)
        if builder is None:
            raise AdaptorConfigError(
                f"Unknown adaptor type '{config.type}'. "
                f"Available: {', '.join(cls.registered_types())}"
            )
        return builder(config)
