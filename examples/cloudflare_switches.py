"""
switch_kit — Cloudflare Workers KV

Requires CLOUDFLARE_AUTH_TOKEN and CLOUDFLARE_ACCOUNT_ID in the environment.
The namespace is created on the first run and discovered on later runs.

    python examples/cloudflare_switches.py my-switches checkout-v2 on
"""

import asyncio
import logging
import sys

from switch_kit import SwitchKit
from switch_kit.cloudflare import CloudflareKVAdaptor, CloudflareKVSettings


async def main(namespace: str, key: str, value: str | None) -> int:
    logging.basicConfig(level=logging.DEBUG)

    adaptor = CloudflareKVAdaptor(namespace, settings=CloudflareKVSettings.from_env())
    client = SwitchKit(adaptor)

    await client.init()
    if not client.initialized:
        return 1
    print(f"namespace {namespace!r} -> {adaptor.namespace_id}")

    if value is not None:
        await client.set(key, value, {"source": "example"})

    switch = await client.get(key)
    print(f"{key} = {switch}")
    return 0 if switch is not None else 1


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1], sys.argv[2], sys.argv[3] if len(sys.argv) > 3 else None)))
