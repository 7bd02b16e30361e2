"""Minecraft version sources, one per upstream distribution.

Build-oriented:  PaperSource, PurpurSource, ForgeSource, NeoForgeSource
Loader-oriented: FabricSource, QuiltSource
Neither:         VanillaSource
"""

from versionproxy.providers.minecraft.base import MinecraftSource, PerVersionBuildSource
from versionproxy.providers.minecraft.forge import ForgeSource
from versionproxy.providers.minecraft.loader_meta import FabricSource, LoaderMetaSource, QuiltSource
from versionproxy.providers.minecraft.neoforge import NeoForgeSource
from versionproxy.providers.minecraft.paper import PaperSource
from versionproxy.providers.minecraft.purpur import PurpurSource
from versionproxy.providers.minecraft.vanilla import VanillaSource

__all__ = [
    "FabricSource",
    "ForgeSource",
    "LoaderMetaSource",
    "MinecraftSource",
    "NeoForgeSource",
    "PaperSource",
    "PerVersionBuildSource",
    "PurpurSource",
    "QuiltSource",
    "VanillaSource",
]
