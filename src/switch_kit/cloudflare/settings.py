"""Connection settings for the Cloudflare KV REST API."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


class CloudflareKVSettings(BaseModel):
    """Credentials and transport options for :class:`CloudflareKV`.

    Attributes:
        auth_token: API token with Workers KV read/write permission
        account_id: Cloudflare account identifier
        api_base_url: Root of the REST API, without trailing slash
        timeout: HTTP request timeout in seconds
    """

    auth_token: str
    account_id: str
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_env(
        cls,
        *,
        auth_token: str | None = None,
        account_id: str | None = None,
        api_base_url: str | None = None,
        timeout: float | None = None,
    ) -> CloudflareKVSettings:
        """Build settings, falling back to environment variables.

        Explicit arguments win.  Otherwise ``CLOUDFLARE_AUTH_TOKEN``,
        ``CLOUDFLARE_ACCOUNT_ID`` and ``CLOUDFLARE_API_BASE_URL`` are read.

        Raises:
            ValueError: If the token or account id is missing.
        """
        resolved_token = auth_token or os.getenv("CLOUDFLARE_AUTH_TOKEN", "")
        resolved_account = account_id or os.getenv("CLOUDFLARE_ACCOUNT_ID", "")
        if not resolved_token:
            raise ValueError(
                "Cloudflare auth token not configured (set auth_token or CLOUDFLARE_AUTH_TOKEN env var)"
            )
        if not resolved_account:
            raise ValueError(
                "Cloudflare account id not configured (set account_id or CLOUDFLARE_ACCOUNT_ID env var)"
            )
        resolved_url = api_base_url or os.getenv("CLOUDFLARE_API_BASE_URL") or DEFAULT_API_BASE_URL
        return cls(
            auth_token=resolved_token,
            account_id=resolved_account,
            api_base_url=resolved_url.rstrip("/"),
            timeout=timeout if timeout is not None else 30.0,
        )
