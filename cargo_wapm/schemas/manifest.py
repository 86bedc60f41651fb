"""Pydantic models for ``wapm.toml`` and the ``[package.metadata.wapm]`` table."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Abi(str, Enum):
    NONE = "none"
    WASI = "wasi"
    EMSCRIPTEN = "emscripten"
    WASM4 = "wasm4"


class WitBindings(BaseModel):
    wit_bindgen: str = Field(..., alias="wit-bindgen", description="Version of wit-bindgen used.")
    wit_exports: Path = Field(..., alias="wit-exports")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def paths(self) -> List[Path]:
        return [self.wit_exports]

    def referenced_files(self, base_dir: Path) -> List[Path]:
        """Every file these bindings point at, joined onto ``base_dir``."""

        return [base_dir / path for path in self.paths()]


class WaiBindings(BaseModel):
    wai_version: str = Field(..., alias="wai-version")
    exports: Optional[Path] = None
    imports: List[Path] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def paths(self) -> List[Path]:
        paths = [self.exports] if self.exports is not None else []
        paths.extend(self.imports)
        return paths

    def referenced_files(self, base_dir: Path) -> List[Path]:
        """Every file these bindings point at, joined onto ``base_dir``."""

        return [base_dir / path for path in self.paths()]


Bindings = Union[WitBindings, WaiBindings]


class WapmMetadata(BaseModel):
    """Contents of a crate's ``[package.metadata.wapm]`` table."""

    namespace: str
    package: Optional[str] = Field(default=None, description="Overrides the crate name on the registry.")
    wasmer_extra_flags: Optional[str] = Field(default=None, alias="wasmer-extra-flags")
    abi: Abi = Abi.NONE
    fs: Optional[Dict[str, str]] = None
    bindings: Optional[Bindings] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class MetadataTable(BaseModel):
    wapm: WapmMetadata

    model_config = ConfigDict(extra="ignore", frozen=True)


class Package(BaseModel):
    name: str
    version: str
    description: str
    license: Optional[str] = None
    license_file: Optional[Path] = Field(default=None, alias="license-file")
    readme: Optional[Path] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None
    wasmer_extra_flags: Optional[str] = Field(default=None, alias="wasmer-extra-flags")
    disable_command_rename: bool = Field(default=False, alias="disable-command-rename")
    rename_commands_to_raw_command_name: bool = Field(
        default=False, alias="rename-commands-to-raw-command-name"
    )

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class Module(BaseModel):
    name: str
    source: Path
    abi: Abi = Abi.NONE
    kind: Optional[str] = None
    interfaces: Optional[Dict[str, str]] = None
    bindings: Optional[Bindings] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class Command(BaseModel):
    name: str
    module: str
    package: Optional[str] = None
    main_args: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class PackageManifest(BaseModel):
    package: Package
    module: Optional[List[Module]] = None
    command: Optional[List[Command]] = None
    fs: Optional[Dict[str, str]] = None
    dependencies: Optional[Dict[str, str]] = None
    base_directory_path: Path = Field(default_factory=Path, exclude=True)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _paths_are_relative(self) -> "PackageManifest":
        paths: List[Path] = [
            path for path in (self.package.license_file, self.package.readme) if path is not None
        ]
        for module in self.module or []:
            paths.append(module.source)
            if module.bindings is not None:
                paths.extend(module.bindings.paths())
        for path in paths:
            if path.is_absolute():
                raise ValueError(f"Manifest paths must be relative to the package directory (got '{path}')")
        return self
