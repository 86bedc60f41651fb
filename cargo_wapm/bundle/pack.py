"""Assemble the package directory handed to the wapm CLI."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ..errors import AssemblyIOError, PathOutsideUnitError
from ..schemas.manifest import PackageManifest
from ..schemas.workspace import Unit
from .manifest import MANIFEST_FILENAME, dump_manifest

logger = logging.getLogger(__name__)


def pack(dest: Path, manifest: PackageManifest, wasm_path: Path, unit: Unit) -> Path:
    """Lay out ``dest`` so it can be published as-is.

    The manifest, compiled binary, license file and readme all land at the top
    of ``dest``. Binding files keep their location relative to the crate's
    ``Cargo.toml``. Returns the path of the written manifest.
    """

    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AssemblyIOError(None, dest, str(exc)) from exc

    manifest_path = dest / MANIFEST_FILENAME
    try:
        size = dump_manifest(manifest, manifest_path)
    except OSError as exc:
        raise AssemblyIOError(None, manifest_path, str(exc)) from exc
    logger.debug("Wrote manifest to %s (%d bytes)", manifest_path, size)

    copy(wasm_path, dest / wasm_path.name)

    base_dir = unit.manifest_dir
    for source in (unit.license_file_path(), unit.readme_path()):
        if source is not None:
            copy(source, dest / source.name)

    for module in manifest.module or []:
        if module.bindings is None:
            continue
        for path in module.bindings.referenced_files(base_dir):
            relative_path = _relative_to(path, base_dir, unit=unit.name)
            copy(path, dest / relative_path)

    return manifest_path


def _relative_to(path: Path, base_dir: Path, *, unit: str) -> Path:
    # Lexical check only. Symlinks inside the crate are copied as the file they point to.
    normalized_base = Path(os.path.normpath(base_dir))
    normalized = Path(os.path.normpath(path))
    try:
        return normalized.relative_to(normalized_base)
    except ValueError as exc:
        raise PathOutsideUnitError(unit, normalized, normalized_base) from exc


def copy(source: Path, destination: Path) -> None:
    logger.debug("Copying %s to %s", source, destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise AssemblyIOError(source, destination, str(exc)) from exc
