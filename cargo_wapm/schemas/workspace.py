"""Pydantic models describing a Cargo workspace as reported by ``cargo metadata``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Target(BaseModel):
    """One buildable artifact declared by a unit."""

    name: str
    kind: List[str] = Field(default_factory=list)
    crate_types: List[str] = Field(default_factory=list)
    src_path: Optional[Path] = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def is_binary(self) -> bool:
        return "bin" in self.kind

    @property
    def is_webassembly_library(self) -> bool:
        return "cdylib" in self.kind


class Unit(BaseModel):
    """A single crate inside the workspace."""

    id: str
    name: str
    version: str
    description: Optional[str] = None
    license: Optional[str] = None
    license_file: Optional[Path] = None
    readme: Optional[Path] = None
    repository: Optional[str] = None
    homepage: Optional[str] = None
    manifest_path: Path
    metadata: Optional[Dict[str, Any]] = None
    targets: List[Target] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def manifest_dir(self) -> Path:
        return self.manifest_path.parent

    @property
    def has_wapm_metadata(self) -> bool:
        return isinstance(self.metadata, dict) and "wapm" in self.metadata

    def license_file_path(self) -> Optional[Path]:
        """Absolute path of the license file, if the crate declares one."""

        if self.license_file is None:
            return None
        return self.manifest_dir / self.license_file

    def readme_path(self) -> Optional[Path]:
        """Absolute path of the readme, if the crate declares one."""

        if self.readme is None:
            return None
        return self.manifest_dir / self.readme


class Workspace(BaseModel):
    """Every package cargo knows about plus which of them are workspace members."""

    packages: List[Unit] = Field(default_factory=list)
    workspace_members: List[str] = Field(default_factory=list)
    workspace_root: Path
    target_directory: Path
    root: Optional[str] = Field(default=None, description="Package id of the root package, if any.")

    model_config = ConfigDict(extra="ignore", frozen=True)

    def members(self) -> List[Unit]:
        member_ids = set(self.workspace_members)
        return [pkg for pkg in self.packages if pkg.id in member_ids]

    def root_package(self) -> Optional[Unit]:
        if self.root is not None:
            return next((pkg for pkg in self.packages if pkg.id == self.root), None)
        root_manifest = self.workspace_root / "Cargo.toml"
        return next((pkg for pkg in self.packages if pkg.manifest_path == root_manifest), None)
