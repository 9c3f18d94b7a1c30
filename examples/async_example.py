#!/usr/bin/env python3
"""
Async Bloomfilter Client Example

Searches for a name, then registers the first available domain and adds
a DNS record. Set BLOOMFILTER_PRIVATE_KEY to run the paid steps.
"""

import asyncio
import logging
import os
import sys

from bloomfilter_client import BloomfilterClient, format_tool_error

logging.basicConfig(level=logging.INFO)


async def search_example(client: BloomfilterClient, name: str):
    """Free search, no wallet needed."""
    print(f"\n--- Search: {name} ---")

    response = await client.search_domains(name, "com,io,xyz")
    for item in response.results:
        status = "available" if item.available else "taken"
        print(f"  {item.domain}: {status}")

    return [r.domain for r in response.results if r.available]


async def register_example(client: BloomfilterClient, domain: str):
    """Paid registration; queued jobs are polled to completion."""
    print(f"\n--- Register: {domain} ---")

    registration = await client.register_domain(domain, years=1)
    print(f"  Status: {registration.status}")
    print(f"  Expires: {registration.expires_at}")

    # Records added right after registration can fail while the zone provisions
    await asyncio.sleep(30)

    record = await client.add_dns_record(domain, "A", "@", "203.0.113.10", ttl=3600)
    print(f"  Added record {record.record_id}: {record.type} {record.host} -> {record.value}")


async def main():
    config = {
        "apiUrl": os.environ.get("BLOOMFILTER_API_URL", "https://api.bloomfilter.xyz"),
        "network": os.environ.get("BLOOMFILTER_NETWORK", "eip155:8453"),
        "privateKey": os.environ.get("BLOOMFILTER_PRIVATE_KEY") or None,
    }

    async with BloomfilterClient.create(config) as client:
        try:
            available = await search_example(client, sys.argv[1] if len(sys.argv) > 1 else "myproject")
            if available and client.wallet is not None:
                await register_example(client, available[0])
        except Exception as e:
            print(format_tool_error(e, client.config.api_url).text)


if __name__ == "__main__":
    asyncio.run(main())
