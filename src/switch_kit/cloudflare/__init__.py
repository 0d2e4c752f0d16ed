"""Cloudflare Workers KV backend: REST gateway, wire models and adaptor."""

from switch_kit.cloudflare.adaptor import CloudflareKVAdaptor
from switch_kit.cloudflare.gateway import CloudflareKV, quote_key
from switch_kit.cloudflare.schema import NAMESPACE_ALREADY_EXISTS, BulkWriteEntry
from switch_kit.cloudflare.settings import CloudflareKVSettings

__all__ = [
    "NAMESPACE_ALREADY_EXISTS",
    "BulkWriteEntry",
    "CloudflareKV",
    "CloudflareKVAdaptor",
    "CloudflareKVSettings",
    "quote_key",
]
