"""Error reporter that writes swallowed failures to the structured log."""

from __future__ import annotations

from typing import Any

from versionproxy.interfaces.error_reporter import IErrorReporter
from versionproxy.utils.errors import VersionProxyError
from versionproxy.utils.logging import get_logger


class LogErrorReporter(IErrorReporter):
    """Emit one ``error``-level event per captured exception."""

    def __init__(self, event: str = "refresh_error") -> None:
        self._event = event
        self._logger = get_logger(__name__)

    def capture_exception(self, error: BaseException, **context: Any) -> None:
        provider = error.provider_name if isinstance(error, VersionProxyError) else None
        self._logger.error(
            self._event,
            error=str(error),
            error_type=type(error).__name__,
            provider=provider,
            exc_info=error,
            **context,
        )
