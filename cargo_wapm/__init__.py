"""Publish Rust crates compiled to WebAssembly to the wapm registry."""

__version__ = "0.2.1"
from .bundle import CargoCompiler, Compiler, compile_to_wasm, generate_manifest, pack
from .errors import PublishError
from .publish import PublishOptions, PublishResult, RegistryClient, WapmCli, publish_unit, publish_workspace
from .schemas import Abi, PackageManifest, Target, Unit, WapmMetadata, Workspace
from .workspace import (
    CargoMetadataProvider,
    MetadataProvider,
    determine_target,
    determine_units_to_publish,
)

__all__ = [
    "__version__",
    "Abi",
    "CargoCompiler",
    "CargoMetadataProvider",
    "Compiler",
    "MetadataProvider",
    "PackageManifest",
    "PublishError",
    "PublishOptions",
    "PublishResult",
    "RegistryClient",
    "Target",
    "Unit",
    "WapmCli",
    "WapmMetadata",
    "Workspace",
    "compile_to_wasm",
    "determine_target",
    "determine_units_to_publish",
    "generate_manifest",
    "pack",
    "publish_unit",
    "publish_workspace",
]
