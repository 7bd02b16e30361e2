"""Error-observability sinks."""

from versionproxy.providers.observability.log_reporter import LogErrorReporter

__all__ = ["LogErrorReporter"]
