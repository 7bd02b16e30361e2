"""Container-registry version sources."""

from versionproxy.providers.docker.node_source import DockerNodeSource, parse_node_tag

__all__ = ["DockerNodeSource", "parse_node_tag"]
