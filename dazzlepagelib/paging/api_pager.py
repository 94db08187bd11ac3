"""Pager for APIs that paginate server-side.

Such APIs answer every page request with an envelope of the form
{items, page, per_page, total_count}. The ApiPager unwraps the items
for display and keeps the page count in step with total_count.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from ..config import PagerConfig
from ..error_policies import ErrorPolicy
from .pager import PageDisplay, Pager


@dataclass
class PageResponse:
    """One page of results as returned by a paginated API."""

    items: List[Any] = field(default_factory=list)
    page: int = 1
    per_page: int = 1
    total_count: int = 0

    @classmethod
    def coerce(cls, response: Union['PageResponse', Mapping[str, Any]]) -> 'PageResponse':
        """Build a PageResponse from a decoded JSON mapping, or pass one through.

        Raises:
            KeyError: If the mapping lacks one of the envelope fields
        """
        if isinstance(response, cls):
            return response
        return cls(
            items=list(response['items']),
            page=int(response['page']),
            per_page=int(response['per_page']),
            total_count=int(response['total_count']),
        )

    @property
    def page_count(self) -> int:
        """Number of pages needed to hold total_count items."""
        if self.per_page <= 0:
            raise ValueError(f"per_page must be positive, got {self.per_page}")
        return math.ceil(self.total_count / self.per_page)


ApiPageLoader = Callable[[int], Awaitable[Union[PageResponse, Mapping[str, Any]]]]


class ApiPager(Pager[List[Any]]):
    """
    Handles any pagination performed by the API.

    The page count is not known up front, so init() must be awaited
    before navigating: it fetches page 1 directly to learn total_count,
    then displays it through the normal cached path.

    Example:
        async def search(page):
            resp = await client.get("/items", params={"page": page})
            return resp.json()  # {"items": [...], "page": ..., ...}

        pager = ApiPager(search, show_items)
        await pager.init()
        await pager.next_page()
    """

    def __init__(
        self,
        page_loader: ApiPageLoader,
        page_display: PageDisplay,
        config: Optional[PagerConfig] = None,
        prefetch_policy: Optional[ErrorPolicy] = None
    ):
        self._api_page_loader = page_loader
        super().__init__(self._load_items, page_display, config, prefetch_policy)

    async def _load_items(self, page: int) -> Optional[List[Any]]:
        """Loader seen by the cache: page number in, items (or NO_DATA) out."""
        if self._state.max == 0:
            # No items exist at all: an empty page, not a missing one
            return []
        if page < 1 or page > self._state.max:
            return None

        response = await self._fetch_envelope(page)
        return response.items

    async def _fetch_envelope(self, page: int) -> PageResponse:
        response = PageResponse.coerce(await self._api_page_loader(page))
        self._state.set_max(response.page_count)
        return response

    async def init(self) -> Any:
        """
        Load the first page to retrieve the number of elements.

        Bypasses the cache because max must be set before the range check
        in the loader can classify any page.
        """
        await self._fetch_envelope(1)
        return await self.display_page(1)

    async def reload(self) -> Any:
        """Start over for a new query or filter."""
        self.reset()
        return await self.init()
