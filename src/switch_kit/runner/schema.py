# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON documents read from stdin and
written to stdout by ``python -m switch_kit.runner``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from switch_kit.switch import SwitchMetadata


class AdaptorConfigSchema(BaseModel):
    """Storage adaptor configuration.

    Attributes:
        type: Adaptor type ("memory", "sqlite" or "cloudflare_kv")
        namespace: Namespace title holding the switches
        path: Path to SQLite database file (for sqlite type)
        auth_token: Cloudflare API token (falls back to CLOUDFLARE_AUTH_TOKEN)
        account_id: Cloudflare account id (falls back to CLOUDFLARE_ACCOUNT_ID)
        api_base_url: Cloudflare API root (falls back to CLOUDFLARE_API_BASE_URL)
        timeout: HTTP request timeout in seconds
    """

    type: str = "memory"
    namespace: str = "switches"
    path: str = ""
    auth_token: str | None = None
    account_id: str | None = None
    api_base_url: str | None = None
    timeout: float | None = None


class SwitchSchema(BaseModel):
    """Switch as serialized in runner output."""

    value: str
    metadata: SwitchMetadata | None = None


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        adaptor: Adaptor configuration
        operation: "get" to read a switch, "set" to write one
        key: Switch key
        value: New value (required for "set")
        metadata: Metadata to store with the value (for "set")
    """

    adaptor: AdaptorConfigSchema = Field(default_factory=AdaptorConfigSchema)
    operation: Literal["get", "set"]
    key: str
    value: str | None = None
    metadata: SwitchMetadata | None = None


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema, even on
    errors.

    Attributes:
        success: Whether the operation completed successfully
        switch: The switch read or written (on success)
        error: Error message (on failure)
        error_type: Error class name (on failure)
    """

    success: bool
    switch: SwitchSchema | None = None
    error: str = ""
    error_type: str = ""
