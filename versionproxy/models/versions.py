"""Normalized version records served by every endpoint.

All Minecraft sources converge to :class:`VersionRecord`; the Docker Hub
source produces :class:`NodeVersion` triples.  Models are frozen so a record
placed in a result list can never change underneath a cached copy.

JSON field names are camelCase (``baseVersion``, ``javaVersions`` ...) because
that is the wire format existing clients and cached payloads already use.
Python code works with the snake_case attribute names; ``populate_by_name``
lets both forms validate.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from versionproxy.utils.versions import classify


class VersionType(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Release channel of a Minecraft version."""

    RELEASE = "release"
    SNAPSHOT = "snapshot"


_WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class JavaVersions(BaseModel):
    """Java runtime requirement for a Minecraft version.

    Values are strings (``"8"``, ``"17"``, ``"21"``) to match the published
    JSON.  ``recommended`` is always an LTS release.
    """

    model_config = _WIRE_CONFIG

    minimum: str
    maximum: str
    recommended: str


class VersionRange(BaseModel):
    """Inclusive ``min``/``max`` pair of build numbers or loader versions."""

    model_config = _WIRE_CONFIG

    min: str
    max: str


class VersionRecord(BaseModel):
    """One distinct Minecraft version (or version + build) from a source.

    A source is either build-oriented (Paper, Purpur, Forge, NeoForge ->
    ``build_numbers``) or loader-oriented (Fabric, Quilt -> ``loader_versions``),
    never both.  Vanilla carries neither.
    """

    model_config = _WIRE_CONFIG

    id: str
    type: VersionType
    base_version: str
    is_stable: bool
    java_versions: JavaVersions
    supports_datapacks: bool
    build_numbers: VersionRange | None = None
    loader_versions: VersionRange | None = None
    is_snapshot: bool

    @model_validator(mode="after")
    def _check_invariants(self) -> VersionRecord:
        if self.is_snapshot != (self.type is VersionType.SNAPSHOT):
            raise ValueError("is_snapshot must equal (type == snapshot)")
        if self.build_numbers is not None and self.loader_versions is not None:
            raise ValueError("a record carries build_numbers or loader_versions, not both")
        return self

    def to_wire(self) -> dict[str, Any]:
        """Dump to the published JSON shape (camelCase, absent ranges omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def create_version_record(
    id: str,  # noqa: A002 -- mirrors the published field name
    base_version: str,
    type: VersionType | str,  # noqa: A002
    is_stable: bool,
    *,
    build_numbers: VersionRange | None = None,
    loader_versions: VersionRange | None = None,
) -> VersionRecord:
    """Build a :class:`VersionRecord`, filling in the classified fields.

    Java requirements and data-pack support are derived from *base_version*
    via :func:`~versionproxy.utils.versions.classify`.  Callers are trusted
    to pass a well-formed identifier.
    """
    version_type = VersionType(type)
    classification = classify(base_version)

    return VersionRecord(
        id=id,
        type=version_type,
        base_version=base_version,
        is_stable=is_stable,
        java_versions=JavaVersions(
            minimum=str(classification.minimum_java),
            maximum=str(classification.maximum_java),
            recommended=str(classification.recommended_java),
        ),
        supports_datapacks=classification.supports_datapacks,
        build_numbers=build_numbers,
        loader_versions=loader_versions,
        is_snapshot=version_type is VersionType.SNAPSHOT,
    )


class NodeVersion(BaseModel):
    """A Node.js release published as a Docker Hub ``node`` image tag."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)

    @property
    def key(self) -> str:
        """Dotted identity used for deduplication, e.g. ``"18.17.1"``."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


def compare_node_versions(a: NodeVersion, b: NodeVersion) -> int:
    """Numeric comparator for :class:`NodeVersion` triples.

    ``8.9.1`` sorts before ``18.0.0``; a string comparison would invert them.
    """
    for left, right in zip(a.as_tuple(), b.as_tuple()):
        if left != right:
            return left - right
    return 0
