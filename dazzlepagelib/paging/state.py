"""Pager state and its transitions.

The pager's counters are shared by every navigation call in flight, so
they are only changed through the named transitions below. None of them
lock anything: overlapping loads simply apply their transitions in the
order they complete.
"""

from dataclasses import dataclass
from enum import Enum


class LoadState(Enum):
    """Whether a page load is in progress."""
    IDLE = "idle"
    LOADING = "loading"


@dataclass
class PagerState:
    """Navigation state of a pager.

    current is 1-based. While idle and initialized, 1 <= current <= max.
    """

    current: int = 1
    max: int = 1
    phase: LoadState = LoadState.IDLE

    @property
    def is_loading(self) -> bool:
        return self.phase is LoadState.LOADING

    def start_loading(self) -> None:
        # Unconditional: a second load simply keeps the phase at LOADING
        self.phase = LoadState.LOADING

    def finish_loading(self) -> None:
        self.phase = LoadState.IDLE

    def move_to(self, page: int) -> None:
        self.current = page

    def step(self, delta: int) -> None:
        self.current += delta

    def set_max(self, page_count: int) -> None:
        self.max = page_count

    def reset(self) -> None:
        self.current = 1
        self.max = 1
        self.phase = LoadState.IDLE
