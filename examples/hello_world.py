"""
switch_kit — Hello World

Switches are cached forever after the first read. Writes go straight
through to the cache once the backend confirms them.
"""

import asyncio
import logging

from switch_kit import InMemoryAdaptor, Switch, SwitchKit


def render_checkout(switch: Switch | None) -> str:
    if switch is not None and switch.value == "on":
        return "new checkout"
    return "classic checkout"


async def main():
    logging.basicConfig(level=logging.INFO)

    # ──────────────────────────────────────
    #  1. Create and initialize the client
    # ──────────────────────────────────────
    client = SwitchKit(
        InMemoryAdaptor({"checkout-v2": Switch(value="off", metadata={"owner": "payments"})})
    )
    await client.init()

    # ──────────────────────────────────────
    #  2. Read a switch (cache miss, then cache hit)
    # ──────────────────────────────────────
    print("1st read:", render_checkout(await client.get("checkout-v2")))
    print("2nd read:", render_checkout(await client.get("checkout-v2")))

    # ──────────────────────────────────────
    #  3. Flip it (write-through)
    # ──────────────────────────────────────
    await client.set("checkout-v2", "on", {"owner": "payments", "rollout": 100})
    print("after set:", render_checkout(await client.get("checkout-v2")))

    # ──────────────────────────────────────
    #  4. Unknown switches are just None
    # ──────────────────────────────────────
    print("unknown:", await client.get("does-not-exist"))

    client.clear_cache()
    print("cached keys after clear:", client.cached_keys())


if __name__ == "__main__":
    asyncio.run(main())
