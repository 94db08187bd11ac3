"""
Cache implementations for DazzlePageLib.

Provides memoizing caches that sit in front of an async accessor, with a
windowed variant that prefetches neighboring keys of sequential data
(e.g., paginated content) in the background.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, List, Optional, Set, TypeVar

from cachetools import Cache

from ..config import CacheConfig, raise_for_errors
from ..error_policies import ContinueOnErrorsPolicy, ErrorPolicy

K = TypeVar('K')
V = TypeVar('V')

# An accessor returns NO_DATA when nothing exists at the requested key.
NO_DATA = None

Accessor = Callable[[Any], Awaitable[Optional[Any]]]


class AsyncCache(ABC, Generic[K, V]):
    """
    A cache used to fast-access elements that were previously retrieved.

    Implementations wrap an accessor and decide what, if anything, to keep.
    """

    @abstractmethod
    async def get(self, key: K) -> Optional[V]:
        """
        Retrieve the element stored under key, fetching it if needed.

        Returns:
            The element, or NO_DATA if the accessor has nothing at key
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Clear all cached data."""
        pass

    def get_cache_stats(self) -> dict:
        """Get cache statistics for monitoring and debugging."""
        return {}


class PassThroughCache(AsyncCache[K, V]):
    """Cache that never stores anything.

    Every get() goes straight to the accessor. Used when a pager is
    configured with caching disabled.
    """

    def __init__(self, accessor: Accessor):
        self._accessor = accessor
        self.fetch_count = 0

    async def get(self, key: K) -> Optional[V]:
        self.fetch_count += 1
        return await self._accessor(key)

    def reset(self) -> None:
        pass

    def get_cache_stats(self) -> dict:
        return {'enabled': False, 'fetch_count': self.fetch_count, 'cache_size': 0}


class PointCache(AsyncCache[K, V]):
    """
    Simple cache that stores everything passing through, keyed by exact key.

    Concurrent get() calls for the same uncached key are not coalesced:
    each one calls the accessor, and whichever resolves last leaves its
    value in the cache.

    Example:
        async def load_user(user_id):
            return await api.fetch_user(user_id)  # None if unknown

        users = PointCache(load_user)
        user = await users.get(42)   # calls the accessor
        user = await users.get(42)   # served from the cache
    """

    def __init__(self, accessor: Accessor):
        """
        Initialize the cache.

        Args:
            accessor: Async callable retrieving the data for a key. It must
                handle invalid access itself and return NO_DATA for it.
        """
        self._accessor = accessor
        # Unbounded: entries only leave through reset()
        self._cache = Cache(maxsize=math.inf)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    def __contains__(self, key: Any) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def keys(self) -> List[Any]:
        """Return the currently cached keys."""
        return list(self._cache.keys())

    async def get(self, key: K) -> Optional[V]:
        """
        Retrieve element.

        A cached element is returned without calling the accessor. On a
        miss the accessor is awaited; NO_DATA is returned as-is and is
        never stored. Accessor errors propagate to the caller.
        """
        if key in self._cache:
            self.cache_hits += 1
            return self._cache[key]

        self.cache_misses += 1
        return await self._fetch(key)

    async def _fetch(self, key: K) -> Optional[V]:
        data = await self._accessor(key)
        if data is NO_DATA:
            return NO_DATA
        # Stores into whatever mapping is current, even after a reset()
        self._cache[key] = data
        return data

    def reset(self) -> None:
        """
        Reset the cache (clears all cached data).

        Fetches already in flight are not cancelled and will still store
        their results when they complete.
        """
        self._cache.clear()
        self.cache_hits = 0
        self.cache_misses = 0

    def get_cache_stats(self) -> dict:
        """
        Get cache statistics for monitoring and debugging.
        """
        total_requests = self.cache_hits + self.cache_misses
        hit_rate = self.cache_hits / total_requests if total_requests > 0 else 0

        return {
            'cache_hits': self.cache_hits,
            'cache_misses': self.cache_misses,
            'hit_rate': hit_rate,
            'cache_size': len(self._cache),
        }


class WindowedCache(PointCache[int, V]):
    """
    A caching mechanism for data stored consecutively (e.g. paginated content).

    Besides the requested key, every get() schedules background fetches for
    the uncached keys in a window around it. Paginated content is mostly
    read sequentially, so the neighbors are usually ready before they are
    asked for.

    Background fetches are fire-and-forget. Their NO_DATA results store
    nothing and their errors go to the prefetch policy; neither can affect
    the value returned by get().

    Example:
        pages = WindowedCache(load_page, CacheConfig(following_items=2))
        first = await pages.get(1)   # also starts fetching 0, 2 and 3
        await pages.drain()          # optional: wait for the prefetches
    """

    def __init__(
        self,
        accessor: Accessor,
        config: Optional[CacheConfig] = None,
        prefetch_policy: Optional[ErrorPolicy] = None
    ):
        """
        Initialize the windowed cache.

        By default, keeps 1 adjacent element on each side.

        Args:
            accessor: Async callable retrieving the data for an index. Keys
                below 1 or past the end are requested too and must map
                to NO_DATA.
            config: Window configuration
            prefetch_policy: Policy handling background fetch errors
                (defaults to ContinueOnErrorsPolicy)
        """
        super().__init__(accessor)
        self.config = config or CacheConfig()
        raise_for_errors(self.config.validate())
        self._prefetch_policy = prefetch_policy or ContinueOnErrorsPolicy()
        self._prefetch_tasks: Set[asyncio.Task] = set()

        # Statistics
        self.prefetches = 0
        self.prefetch_failures = 0
        self.policy_failures = 0

    @property
    def prefetch_policy(self) -> ErrorPolicy:
        return self._prefetch_policy

    @property
    def pending_prefetches(self) -> int:
        """Number of background fetches still running."""
        return sum(1 for task in self._prefetch_tasks if not task.done())

    def window_keys(self, key: int) -> List[int]:
        """Neighbor keys that a get(key) would consider for prefetching."""
        if not self.config.preload:
            return []
        below = [key - i for i in range(1, self.config.previous_items + 1)]
        above = [key + i for i in range(1, self.config.following_items + 1)]
        return below + above

    async def get(self, key: int) -> Optional[V]:
        """
        Retrieve element and start loading its uncached neighbors.

        The return value always corresponds to key itself; the completion
        order of the primary fetch and the prefetches is unspecified.
        """
        for neighbor in self.window_keys(key):
            if neighbor not in self._cache:
                self._schedule_prefetch(neighbor)

        return await super().get(key)

    def _schedule_prefetch(self, key: int) -> None:
        task = asyncio.create_task(self._prefetch(key))
        # Hold a reference until done so the task is not garbage collected
        self._prefetch_tasks.add(task)
        task.add_done_callback(self._prefetch_tasks.discard)

    async def _prefetch(self, key: int) -> None:
        self.prefetches += 1
        try:
            await self._fetch(key)
        except Exception as e:
            self.prefetch_failures += 1
            try:
                await self._prefetch_policy.handle(e, 'prefetch', key)
            except Exception:
                # Nothing awaits this task; a re-raising policy has nowhere to go
                self.policy_failures += 1

    async def drain(self) -> None:
        """Wait until every scheduled background fetch has finished."""
        pending = [task for task in self._prefetch_tasks if not task.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [task for task in self._prefetch_tasks if not task.done()]

    def reset(self) -> None:
        """
        Reset the cache (clears all cached data).

        Background fetches in flight are not cancelled.
        """
        super().reset()
        self.prefetches = 0
        self.prefetch_failures = 0
        self.policy_failures = 0

    def get_cache_stats(self) -> dict:
        """
        Get extended cache statistics including prefetch counters.
        """
        stats = super().get_cache_stats()
        stats['prefetches'] = self.prefetches
        stats['prefetch_failures'] = self.prefetch_failures
        stats['policy_failures'] = self.policy_failures
        stats['pending_prefetches'] = self.pending_prefetches
        return stats
