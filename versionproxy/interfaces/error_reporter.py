"""Abstract base class for error-observability sinks.

Refresh failures are never raised to HTTP callers; they are handed to an
``IErrorReporter`` so operators can still see them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IErrorReporter(ABC):
    """Receives exceptions that the pipeline swallowed on purpose."""

    @abstractmethod
    def capture_exception(self, error: BaseException, **context: Any) -> None:
        """Record *error* with structured *context* (cache key, source name ...).

        Implementations must not raise.
        """
