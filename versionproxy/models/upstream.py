"""Pydantic schemas for the upstream API responses we consume.

Each upstream's JSON is validated into one of these models at the adapter
boundary, so malformed payloads fail fast with a ``ValidationError`` (turned
into :class:`~versionproxy.utils.errors.UpstreamSchemaError`) instead of
leaking undefined shapes into the pipeline.  Only the fields we read are
declared; everything else is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, RootModel

# ---------------------------------------------------------------------------
# Mojang -- https://launchermeta.mojang.com/mc/game/version_manifest.json
# ---------------------------------------------------------------------------


class MojangVersion(BaseModel):
    id: str
    type: str


class MojangVersionManifest(BaseModel):
    versions: list[MojangVersion]


# ---------------------------------------------------------------------------
# PaperMC -- /v2/projects/paper and /v2/projects/paper/versions/{v}/builds
# ---------------------------------------------------------------------------


class PaperProject(BaseModel):
    versions: list[str]


class PaperBuild(BaseModel):
    build: int


class PaperBuilds(BaseModel):
    builds: list[PaperBuild] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# PurpurMC -- /v2/purpur and /v2/purpur/{v}
# ---------------------------------------------------------------------------


class PurpurProject(BaseModel):
    versions: list[str]


class PurpurBuildList(BaseModel):
    all: list[str] = Field(default_factory=list)


class PurpurVersion(BaseModel):
    builds: PurpurBuildList = Field(default_factory=PurpurBuildList)


# ---------------------------------------------------------------------------
# Fabric (meta v2) and Quilt (meta v3) share the same list shapes.
# ---------------------------------------------------------------------------


class LoaderVersion(BaseModel):
    version: str


class LoaderVersionList(RootModel[list[LoaderVersion]]):
    pass


class GameVersion(BaseModel):
    version: str
    stable: bool = False


class GameVersionList(RootModel[list[GameVersion]]):
    pass


# ---------------------------------------------------------------------------
# Forge -- promotions_slim.json
# ---------------------------------------------------------------------------


class ForgePromotions(BaseModel):
    # Keys look like "1.20.1-recommended" / "1.20.1-latest"; order is
    # whatever the upstream file uses.
    promos: dict[str, str]


# ---------------------------------------------------------------------------
# NeoForge -- maven API versions listing
# ---------------------------------------------------------------------------


class NeoForgeVersions(BaseModel):
    versions: list[str]


# ---------------------------------------------------------------------------
# Docker Hub -- /v2/repositories/library/{image}/tags
# ---------------------------------------------------------------------------


class DockerTag(BaseModel):
    name: str


class DockerTagPage(BaseModel):
    next: str | None = None
    results: list[DockerTag] = Field(default_factory=list)
