"""Pagination over integer-indexed pages.

The Pager splits a large amount of elements into numbered pages, loads
them through a WindowedCache and hands each loaded page to a display
callback. Every navigation operation ends in display_page(), the only
method that talks to the cache.
"""

import functools
import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from ..caching import NO_DATA, AsyncCache, PassThroughCache, WindowedCache
from ..config import PagerConfig, raise_for_errors
from ..error_policies import ErrorPolicy
from .state import PagerState

T = TypeVar('T')

PageLoader = Callable[[int], Awaitable[Optional[T]]]
PageDisplay = Callable[[T], Any]


class NavigationInProgressError(RuntimeError):
    """Raised when navigation is requested while a page is still loading.

    This is a routine control signal: callers such as UI handlers are
    expected to catch it and drop the request.
    """

    def __init__(self, message: str = "Prevent multiple loadings"):
        super().__init__(message)


def loading_guard(method):
    """Reject the call while loading, if the pager prevents multiple loadings."""
    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        if self.config.prevent_multiple_loadings and self.is_loading:
            raise NavigationInProgressError()
        return await method(self, *args, **kwargs)
    return wrapper


class Paginator(ABC):
    """Navigation interface shared by all pagers."""

    @property
    @abstractmethod
    def current(self) -> int:
        """Current page number (1-based)."""

    @property
    @abstractmethod
    def max(self) -> int:
        """Last valid page number."""

    @property
    @abstractmethod
    def is_loading(self) -> bool:
        """True while a page is being loaded."""

    @abstractmethod
    def reset(self) -> None:
        """Reset the pager for a new batch of elements."""

    @abstractmethod
    async def display_page(self, page: int) -> Any:
        """Load and display a page without moving the current pointer."""

    @abstractmethod
    async def next_page(self) -> Any:
        pass

    @abstractmethod
    async def previous_page(self) -> Any:
        pass

    @abstractmethod
    async def first_page(self) -> Any:
        pass

    @abstractmethod
    async def last_page(self) -> Any:
        pass


class Pager(Paginator, Generic[T]):
    """
    The pager handles the logic of pagination for a given type of data.

    Example:
        async def load(page):
            return await db.fetch_page(page)  # None past the end

        async def show(rows):
            render(rows)

        pager = Pager(load, show)
        await pager.first_page()
        await pager.next_page()
    """

    def __init__(
        self,
        page_loader: PageLoader[T],
        page_display: PageDisplay[T],
        config: Optional[PagerConfig] = None,
        prefetch_policy: Optional[ErrorPolicy] = None
    ):
        """
        Initialize the pager.

        Args:
            page_loader: Async callable loading a page; returns NO_DATA for
                pages that do not exist
            page_display: Callable displaying a loaded page; may be async
            config: Pager configuration (defaults to PagerConfig())
            prefetch_policy: Policy for background prefetch errors. Ignored
                when config.enable_cache is False, since nothing is prefetched
                and the cache then has no prefetch_policy attribute
        """
        self.config = config or PagerConfig()
        raise_for_errors(self.config.validate())

        self._state = PagerState()
        self._page_loader = page_loader
        self._page_display = page_display
        self._cache = self._create_cache(prefetch_policy)

    def _create_cache(self, prefetch_policy: Optional[ErrorPolicy]) -> AsyncCache:
        if not self.config.enable_cache:
            return PassThroughCache(self._page_loader)
        return WindowedCache(
            self._page_loader,
            self.config.cache_config(),
            prefetch_policy=prefetch_policy
        )

    @property
    def current(self) -> int:
        return self._state.current

    @property
    def max(self) -> int:
        return self._state.max

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def state(self) -> PagerState:
        return self._state

    @property
    def cache(self) -> AsyncCache:
        return self._cache

    def reset(self) -> None:
        """
        Reset the pager for a new batch of elements.

        Safe to call mid-load, but the load is neither awaited nor
        cancelled: when it completes it still returns the pager to idle
        and may still move the current page.
        """
        self._state.reset()
        self._cache.reset()

    async def display_page(self, page: int) -> Any:
        """
        Load a page through the cache and pass it to the display callback.

        The display callback is skipped when the page has no data. The
        pager returns to idle whatever the outcome; loader and display
        errors are re-raised afterwards.

        Returns:
            Whatever the display callback returned, or None
        """
        self._state.start_loading()
        try:
            data = await self._cache.get(page)
            if data is NO_DATA:
                return None
            result = self._page_display(data)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            self._state.finish_loading()

    @loading_guard
    async def next_page(self) -> None:
        if self._state.current < self._state.max:
            await self.display_page(self._state.current + 1)
            self._state.step(1)

    @loading_guard
    async def previous_page(self) -> None:
        if self._state.current > 1:
            await self.display_page(self._state.current - 1)
            self._state.step(-1)

    @loading_guard
    async def first_page(self) -> None:
        await self.display_page(1)
        self._state.move_to(1)

    @loading_guard
    async def last_page(self) -> None:
        await self.display_page(self._state.max)
        # max as known once the load is done
        self._state.move_to(self._state.max)

    @loading_guard
    async def go_to_page(self, page: int) -> None:
        """Jump to an arbitrary page. Out-of-range pages display nothing."""
        await self.display_page(page)
        self._state.move_to(page)
