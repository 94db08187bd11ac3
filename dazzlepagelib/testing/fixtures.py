"""Test fixtures for DazzlePageLib consumers.

These fixtures stand in for the external collaborators of a cache or
pager (accessors, page loaders, paginated APIs) and provide controlled
access to cache state without exposing implementation details as part
of the public API.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run until they block on something.

    Each round yields to the event loop once; a few rounds are enough for
    a freshly created task to start and for the prefetches it schedules
    to reach their accessor calls.
    """
    for _ in range(rounds):
        await asyncio.sleep(0)


class RecordingAccessor:
    """Accessor backed by a dict that records every call.

    Keys missing from the data return None (no data). Keys listed in
    fail_keys raise LookupError instead.

    Example:
        accessor = RecordingAccessor({1: "a", 2: "b"})
        cache = PointCache(accessor)
        await cache.get(1)
        assert accessor.call_count(1) == 1
    """

    def __init__(
        self,
        data: Optional[Mapping[Any, Any]] = None,
        fail_keys: Iterable[Any] = (),
        delay: float = 0.0
    ):
        self.data: Dict[Any, Any] = dict(data or {})
        self.fail_keys = set(fail_keys)
        self.delay = delay
        self.calls: List[Any] = []

    async def __call__(self, key: Any) -> Any:
        self.calls.append(key)
        if self.delay:
            await asyncio.sleep(self.delay)
        if key in self.fail_keys:
            raise LookupError(f"accessor failure for key {key!r}")
        return self.data.get(key)

    def call_count(self, key: Any = None) -> int:
        """Number of calls, for one key or in total."""
        if key is None:
            return len(self.calls)
        return self.calls.count(key)

    def called_keys(self) -> List[Any]:
        """Distinct keys requested, sorted."""
        return sorted(set(self.calls))

    def clear_calls(self) -> None:
        self.calls.clear()


class GatedAccessor:
    """Accessor whose calls block until the test resolves them.

    Every call parks on its own future, so tests decide exactly when and
    in which order overlapping fetches complete.

    Example:
        accessor = GatedAccessor()
        task = asyncio.create_task(cache.get(3))
        await settle()
        accessor.resolve(3, "page three")
        assert await task == "page three"
    """

    def __init__(self):
        self.calls: List[Any] = []
        self._waiters: List[Tuple[Any, asyncio.Future]] = []

    async def __call__(self, key: Any) -> Any:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(key)
        self._waiters.append((key, future))
        return await future

    def call_count(self, key: Any = None) -> int:
        if key is None:
            return len(self.calls)
        return self.calls.count(key)

    def pending_keys(self) -> List[Any]:
        """Keys of calls still waiting, oldest first."""
        return [key for key, future in self._waiters if not future.done()]

    def _oldest_pending(self, key: Any) -> asyncio.Future:
        for waiting_key, future in self._waiters:
            if waiting_key == key and not future.done():
                return future
        raise LookupError(f"no pending call for key {key!r}")

    def resolve(self, key: Any, value: Any) -> None:
        """Complete the oldest pending call for key with value."""
        self._oldest_pending(key).set_result(value)

    def fail(self, key: Any, error: Exception) -> None:
        """Complete the oldest pending call for key with an error."""
        self._oldest_pending(key).set_exception(error)

    def resolve_all(self, data: Optional[Mapping[Any, Any]] = None) -> None:
        """Complete every pending call, using data (missing keys get None)."""
        data = data or {}
        for key, future in self._waiters:
            if not future.done():
                future.set_result(data.get(key))


class PagedApiStub:
    """Fake paginated API serving {items, page, per_page, total_count}.

    Example:
        api = PagedApiStub(list(range(1, 36)), per_page=10)
        pager = ApiPager(api, display)
        await pager.init()
        assert pager.max == 4
    """

    def __init__(self, items: Sequence[Any], per_page: int = 10, fail_pages: Iterable[int] = ()):
        self.items = list(items)
        self.per_page = per_page
        self.fail_pages = set(fail_pages)
        self.calls: List[int] = []

    def page_items(self, page: int) -> List[Any]:
        start = (page - 1) * self.per_page
        return self.items[start:start + self.per_page]

    async def __call__(self, page: int) -> Dict[str, Any]:
        self.calls.append(page)
        if page in self.fail_pages:
            raise ConnectionError(f"page {page} unavailable")
        return {
            'items': self.page_items(page),
            'page': page,
            'per_page': self.per_page,
            'total_count': len(self.items),
        }


class DisplayRecorder:
    """Async display callback that remembers every page it was given."""

    def __init__(self, fail_with: Optional[Exception] = None):
        self.shown: List[Any] = []
        self.fail_with = fail_with

    async def __call__(self, data: Any) -> int:
        self.shown.append(data)
        if self.fail_with is not None:
            raise self.fail_with
        return len(self.shown)

    @property
    def last(self) -> Any:
        return self.shown[-1] if self.shown else None


class CacheTestHelper:
    """Public test fixture for cache verification.

    Accepts a cache or a pager (whose cache is inspected).

    Example:
        pager = Pager(loader, display)
        await pager.first_page()
        helper = CacheTestHelper(pager)
        assert helper.was_cached(2)
    """

    def __init__(self, cache_or_pager):
        self._cache = getattr(cache_or_pager, 'cache', cache_or_pager)

    def cached_keys(self) -> List[Any]:
        """Cached keys, sorted when they are comparable."""
        if not hasattr(self._cache, 'keys'):
            return []
        keys = self._cache.keys()
        try:
            return sorted(keys)
        except TypeError:
            return list(keys)

    def was_cached(self, key: Any) -> bool:
        return key in self.cached_keys()

    def get_summary(self) -> Dict[str, Any]:
        """Returns high-level cache state for testing.

        Returns:
            Dictionary containing:
            - total_entries: Number of cached keys
            - keys: The cached keys
            - has_cache: Whether the cache stores anything at all
        """
        keys = self.cached_keys()
        return {
            'total_entries': len(keys),
            'keys': keys,
            'has_cache': hasattr(self._cache, 'keys'),
        }
