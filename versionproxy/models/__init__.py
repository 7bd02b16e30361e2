"""versionproxy domain models -- re-exports the public model classes.

Submodules:
    - versions.py -- normalized records served to clients (VersionRecord, NodeVersion)
    - upstream.py -- schemas for the upstream API payloads we validate
    - results.py  -- FetchSuccess / FetchFailure outcome types
"""

from __future__ import annotations

from versionproxy.models.results import FetchFailure, FetchResult, FetchSuccess
from versionproxy.models.versions import (
    JavaVersions,
    NodeVersion,
    VersionRange,
    VersionRecord,
    VersionType,
    compare_node_versions,
    create_version_record,
)

__all__ = [
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "JavaVersions",
    "NodeVersion",
    "VersionRange",
    "VersionRecord",
    "VersionType",
    "compare_node_versions",
    "create_version_record",
]
