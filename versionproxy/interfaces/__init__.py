"""Public interface definitions for the external collaborators.

Business logic (the refresh orchestrator and scheduler) talks to upstreams,
caches and error sinks only through these abstract base classes.  Concrete
adapters live in ``versionproxy/providers/`` and are wired up in
``versionproxy/main.py``; tests inject fakes instead.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in versionproxy/providers/)
    ─────────────────────────────────────────────────────────────────────
    IVersionSource     →  VanillaSource, PaperSource, PurpurSource,
                          FabricSource, QuiltSource, ForgeSource,
                          NeoForgeSource, DockerNodeSource
    ICacheProvider     →  MemoryCacheProvider, RedisCacheProvider
    IErrorReporter     →  LogErrorReporter
"""

from versionproxy.interfaces.cache_provider import ICacheProvider
from versionproxy.interfaces.error_reporter import IErrorReporter
from versionproxy.interfaces.version_source import IVersionSource

__all__ = [
    "ICacheProvider",
    "IErrorReporter",
    "IVersionSource",
]
