"""DazzlePageLib - Async caching and pagination library.

DazzlePageLib fetches externally sourced data keyed by page or index
without re-fetching what was already seen and while prefetching what is
likely to be read next.

Building blocks:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Caching:
    from dazzlepagelib.caching import PointCache, WindowedCache

Pagination:
    from dazzlepagelib.paging import Pager, ApiPager
━━━━━━━━━━━━━━━━━━━━━━━━━━

Everything runs on a single asyncio event loop.
"""

__version__ = "0.1.0"

from .config import CacheConfig, PagerConfig
from .error_policies import ErrorPolicy, ContinueOnErrorsPolicy, CollectErrorsPolicy
from .caching import NO_DATA, AsyncCache, PassThroughCache, PointCache, WindowedCache
from .paging import (
    LoadState,
    PagerState,
    NavigationInProgressError,
    Paginator,
    Pager,
    ApiPager,
    PageResponse,
)

__all__ = [
    "__version__",
    # Configuration
    "CacheConfig",
    "PagerConfig",
    # Error policies
    "ErrorPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    # Caching
    "NO_DATA",
    "AsyncCache",
    "PassThroughCache",
    "PointCache",
    "WindowedCache",
    # Pagination
    "LoadState",
    "PagerState",
    "NavigationInProgressError",
    "Paginator",
    "Pager",
    "ApiPager",
    "PageResponse",
]
