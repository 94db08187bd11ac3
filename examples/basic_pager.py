#!/usr/bin/env python3
"""
Basic paging example showing prefetching in action.

This example demonstrates:
- Wrapping a slow paginated API with ApiPager
- Navigating while neighboring pages load in the background
- Reading cache statistics afterwards
"""

import asyncio
import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlepagelib import ApiPager, NavigationInProgressError

CATALOG = [f"product-{n:03d}" for n in range(1, 48)]
PER_PAGE = 10


async def fetch_catalog_page(page):
    """Pretend to be a remote API that takes a while to answer."""
    await asyncio.sleep(0.2)
    start = (page - 1) * PER_PAGE
    return {
        "items": CATALOG[start:start + PER_PAGE],
        "page": page,
        "per_page": PER_PAGE,
        "total_count": len(CATALOG),
    }


async def show(items):
    print(f"  {items[0]} .. {items[-1]} ({len(items)} items)")


async def main():
    """Walk the catalog forwards, then jump back to the start."""
    pager = ApiPager(fetch_catalog_page, show)

    print("Initializing...")
    await pager.init()
    print(f"{pager.max} pages available")
    print("-" * 50)

    while pager.current < pager.max:
        # Give the prefetch of the next page time to land
        await asyncio.sleep(0.3)
        started = time.perf_counter()
        await pager.next_page()
        print(f"page {pager.current} in {(time.perf_counter() - started) * 1000:.1f} ms")

    # A second request while the first is loading is rejected
    pager.cache.reset()
    first = asyncio.create_task(pager.first_page())
    await asyncio.sleep(0)
    try:
        await pager.last_page()
    except NavigationInProgressError:
        print("last_page() rejected: still loading page 1")
    await first

    print(f"\nCache stats: {pager.cache.get_cache_stats()}")


if __name__ == "__main__":
    asyncio.run(main())
