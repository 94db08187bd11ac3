"""
Pagination for DazzlePageLib.

Pager drives navigation over numbered pages on top of a WindowedCache;
ApiPager adapts APIs that return {items, page, per_page, total_count}.
"""

from .state import LoadState, PagerState
from .pager import NavigationInProgressError, Paginator, Pager, loading_guard
from .api_pager import ApiPager, PageResponse

__all__ = [
    'LoadState',
    'PagerState',
    'NavigationInProgressError',
    'Paginator',
    'Pager',
    'loading_guard',
    'ApiPager',
    'PageResponse',
]
