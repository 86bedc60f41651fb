"""Data models used during publishing."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass(slots=True)
class PublishOptions:
    dry_run: bool = False
    manifest_path: Optional[Path] = None
    workspace: bool = False
    features: List[str] = field(default_factory=list)
    all_features: bool = False
    no_default_features: bool = False
    exclude: List[str] = field(default_factory=list)
    debug: bool = False


@dataclass(slots=True)
class PublishResult:
    unit: str
    package: str
    version: str
    package_dir: Path
    manifest_path: Path
    wasm_path: Path
    dry_run: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "unit": self.unit,
            "package": self.package,
            "version": self.version,
            "package_dir": str(self.package_dir),
            "manifest_path": str(self.manifest_path),
            "wasm_path": str(self.wasm_path),
            "dry_run": self.dry_run,
        }
