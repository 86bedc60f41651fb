"""Schema definitions for workspace metadata and wapm manifests."""

from .manifest import (
    Abi,
    Bindings,
    Command,
    MetadataTable,
    Module,
    Package,
    PackageManifest,
    WaiBindings,
    WapmMetadata,
    WitBindings,
)
from .workspace import Target, Unit, Workspace

__all__ = [
    "Abi",
    "Bindings",
    "Command",
    "MetadataTable",
    "Module",
    "Package",
    "PackageManifest",
    "Target",
    "Unit",
    "WaiBindings",
    "WapmMetadata",
    "WitBindings",
    "Workspace",
]
