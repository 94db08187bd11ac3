"""
Error handling policies for DazzlePageLib.

Background prefetches run detached from the caller that triggered them,
so their failures cannot be raised anywhere useful. This module provides
the Policy objects that decide what happens to those failures instead.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import sys


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    raised by an accessor during a background fetch.
    """

    @abstractmethod
    async def handle(self, error: Exception, method_name: str, key: Any) -> Any:
        """
        Handle an error that occurred during a background fetch.

        Implementations must not raise: nothing awaits a background fetch,
        so a raised error would only surface as an unretrieved task exception.

        Args:
            error: The exception that was raised
            method_name: Name of the operation that failed (e.g., 'prefetch')
            key: The cache key being fetched when the error occurred

        Returns:
            Value used in place of the failed result (normally None)
        """
        pass


def _error_record(error: Exception, method_name: str, key: Any) -> Dict[str, Any]:
    return {
        'key': key,
        'method': method_name,
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error)
    }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors, warns, and continues.

    Errors are collected for later inspection and None is returned so the
    failed key simply stays uncached. This is the default for prefetching.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    async def handle(self, error: Exception, method_name: str, key: Any) -> Any:
        """Record the error, warn if verbose, and return None."""
        self.errors.append(_error_record(error, method_name, key))

        if self.verbose:
            print(f"\nWARNING: Error in {method_name} for key {key!r}: {error}", file=sys.stderr)

        return None

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        keys = []
        for record in self.errors:
            if record['key'] not in keys:
                keys.append(record['key'])

        return {
            'total_errors': len(self.errors),
            'failed_keys': keys,
            'errors': self.errors  # Full error details
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all errors without printing anything.

    Useful in tests and in applications that inspect failures afterwards.
    """

    def __init__(self):
        """Initialize the policy."""
        super().__init__(verbose=False)
