"""Concrete adapters for the interfaces in ``versionproxy.interfaces``.

- **minecraft** -- one version source per Minecraft server distribution.
- **docker** -- Docker Hub tag listing for the official ``node`` image.
- **cache** -- in-memory and Redis cache backends.
- **observability** -- error reporters.
- **upstream_client** -- JSON-over-HTTP helper with the retry policy.
"""
