"""
Caching layer for DazzlePageLib.

This module provides memoizing caches in front of async accessors,
including a windowed cache that prefetches neighboring indices.
"""

from .cache import (
    NO_DATA,
    AsyncCache,
    PassThroughCache,
    PointCache,
    WindowedCache,
)

__all__ = [
    'NO_DATA',
    'AsyncCache',
    'PassThroughCache',
    'PointCache',
    'WindowedCache',
]
