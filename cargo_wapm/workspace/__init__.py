"""Workspace inspection and publish-set selection."""

from .metadata import (
    CargoMetadataProvider,
    Features,
    MetadataProvider,
    MetadataRequest,
    load_workspace,
    parse_metadata,
)
from .selection import determine_units_to_publish
from .targets import determine_target, wasm_binary_name

__all__ = [
    "CargoMetadataProvider",
    "Features",
    "MetadataProvider",
    "MetadataRequest",
    "determine_target",
    "determine_units_to_publish",
    "load_workspace",
    "parse_metadata",
    "wasm_binary_name",
]
