"""Testing utilities for DazzlePageLib consumers."""

from .fixtures import (
    CacheTestHelper,
    DisplayRecorder,
    GatedAccessor,
    PagedApiStub,
    RecordingAccessor,
    settle,
)

__all__ = [
    'CacheTestHelper',
    'DisplayRecorder',
    'GatedAccessor',
    'PagedApiStub',
    'RecordingAccessor',
    'settle',
]
