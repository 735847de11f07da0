#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "cachet",
# ]
#
# [tool.uv.sources]
# cachet = { path = "../", editable = true }
# ///

import asyncio

import httpx

import cachet


def print_event(event: cachet.CacheEvent, request: httpx.Request) -> None:
    print(f"  {event} {request.method} {request.url}")


async def fetch_and_print(client: cachet.AsyncCacheClient, url: str) -> None:
    print(f"\n➡ Sending request to {url}...")
    response = await client.get(url)

    print(f"🔄 From Cache: {response.extensions['from_cache']}")
    print(f"📦 Status: {response.status_code}, {len(response.content)} bytes")


async def main() -> None:
    url = "https://www.example.com/"
    async with cachet.AsyncCacheClient(observer=print_event) as client:
        await fetch_and_print(client, url)
        await fetch_and_print(client, url)


if __name__ == "__main__":
    asyncio.run(main())
