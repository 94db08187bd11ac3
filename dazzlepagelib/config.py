"""Configuration system for DazzlePageLib.

This module defines how users specify caching and navigation behavior:
how many neighboring pages to prefetch, whether the cache is used at all,
and whether overlapping navigation calls are allowed.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class CacheConfig:
    """Configuration for a windowed (prefetching) cache."""

    previous_items: int = 1   # Keys below the requested one to prefetch
    following_items: int = 1  # Keys above the requested one to prefetch
    preload: bool = True      # False disables neighbor prefetch entirely

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.previous_items < 0:
            errors.append("previous_items cannot be negative")

        if self.following_items < 0:
            errors.append("following_items cannot be negative")

        return errors


@dataclass
class PagerConfig:
    """Complete configuration for a pager.

    This is the primary way users tune navigation. The window options
    are forwarded to the pager's WindowedCache.
    """

    # Navigation
    prevent_multiple_loadings: bool = True  # Reject navigation while loading

    # Caching
    enable_cache: bool = True  # False = every fetch goes to the loader
    preload: bool = True       # Prefetch pages around the displayed one

    # Prefetch window
    previous_items: int = 1
    following_items: int = 1

    @classmethod
    def uncached(cls) -> 'PagerConfig':
        """Create config that always goes to the page loader.

        Returns:
            PagerConfig with caching and prefetching disabled
        """
        return cls(enable_cache=False, preload=False)

    @classmethod
    def concurrent(cls) -> 'PagerConfig':
        """Create config that allows overlapping navigation calls.

        Overlapping loads race on the pager state; last write wins.

        Returns:
            PagerConfig with the loading guard disabled
        """
        return cls(prevent_multiple_loadings=False)

    def cache_config(self) -> CacheConfig:
        """Derive the cache configuration for this pager."""
        return CacheConfig(
            previous_items=self.previous_items,
            following_items=self.following_items,
            preload=self.preload,
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        # preload is ignored when enable_cache is False
        return self.cache_config().validate()


def raise_for_errors(errors: List[str]) -> None:
    """Raise ValueError listing every validation error, if any."""
    if errors:
        raise ValueError("Invalid configuration: " + "; ".join(errors))
