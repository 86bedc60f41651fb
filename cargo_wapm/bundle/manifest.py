"""Synthesize, write and read ``wapm.toml`` manifests."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

import tomli_w
from pydantic import ValidationError

from ..errors import InvalidMetadataError, MissingDescriptionError, PathOutsideUnitError
from ..schemas.manifest import (
    Bindings,
    Command,
    MetadataTable,
    Module,
    Package,
    PackageManifest,
    WitBindings,
)
from ..schemas.workspace import Target, Unit
from ..workspace.targets import wasm_binary_name

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "wapm.toml"


def generate_manifest(unit: Unit, target: Target) -> PackageManifest:
    """Build the ``wapm.toml`` contents for ``target`` from the crate's metadata."""

    logger.debug("Generating a manifest for %s (target %s)", unit.name, target.name)

    try:
        table = MetadataTable.model_validate(unit.metadata or {})
    except ValidationError as exc:
        raise InvalidMetadataError(
            unit.name, f"Unable to deserialize the [package.metadata.wapm] table: {exc}"
        ) from exc
    wapm = table.wapm

    if unit.description is None:
        raise MissingDescriptionError(unit.name, 'The "description" field in your Cargo.toml wasn\'t set')
    if unit.description == "":
        raise MissingDescriptionError(unit.name, 'The "description" field in your Cargo.toml is empty')

    package_name = f"{wapm.namespace}/{wapm.package or unit.name}"

    module = Module(
        name=target.name,
        source=Path(wasm_binary_name(target)).with_suffix(".wasm"),
        abi=wapm.abi,
        bindings=_relative_bindings(unit, wapm.bindings),
    )

    commands: Optional[list[Command]] = None
    if target.is_binary:
        commands = [Command(name=target.name, module=target.name, package=package_name)]

    package = Package(
        name=package_name,
        version=unit.version,
        description=unit.description,
        license=unit.license,
        license_file=_file_name(unit.license_file),
        readme=_file_name(unit.readme),
        repository=unit.repository,
        homepage=unit.homepage,
        wasmer_extra_flags=wapm.wasmer_extra_flags,
        disable_command_rename=False,
        rename_commands_to_raw_command_name=False,
    )

    try:
        return PackageManifest(
            package=package,
            module=[module],
            command=commands,
            fs=wapm.fs,
            dependencies=None,
            base_directory_path=Path(),
        )
    except ValidationError as exc:
        raise InvalidMetadataError(unit.name, f"Unable to generate a valid wapm.toml: {exc}") from exc


def _relative_bindings(unit: Unit, bindings: Optional[Bindings]) -> Optional[Bindings]:
    # wapm.toml only accepts paths relative to the crate directory.
    if bindings is None:
        return None

    base_dir = Path(os.path.normpath(unit.manifest_dir))

    def relative(path: Path) -> Path:
        if not path.is_absolute():
            return path
        normalized = Path(os.path.normpath(path))
        if not normalized.is_relative_to(base_dir):
            raise PathOutsideUnitError(unit.name, normalized, base_dir)
        return normalized.relative_to(base_dir)

    if isinstance(bindings, WitBindings):
        return bindings.model_copy(update={"wit_exports": relative(bindings.wit_exports)})
    return bindings.model_copy(
        update={
            "exports": None if bindings.exports is None else relative(bindings.exports),
            "imports": [relative(path) for path in bindings.imports],
        }
    )


def _file_name(path: Optional[Path]) -> Optional[Path]:
    # The assembler copies these next to wapm.toml.
    if path is None:
        return None
    return Path(path.name)


def render_manifest(manifest: PackageManifest) -> str:
    payload = manifest.model_dump(mode="json", by_alias=True, exclude_none=True)
    return tomli_w.dumps(payload)


def dump_manifest(manifest: PackageManifest, path: Path) -> int:
    """Write a manifest to disk and return the number of bytes written."""

    text = render_manifest(manifest)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return len(text.encode("utf-8"))


def load_manifest(path: Path) -> PackageManifest:
    """Load a manifest from TOML."""

    with path.open("rb") as handle:
        payload = tomllib.load(handle)
    return PackageManifest.model_validate(payload)
