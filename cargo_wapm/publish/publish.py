"""High-level publish workflow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..bundle.compiler import Compiler, compile_to_wasm
from ..bundle.manifest import generate_manifest
from ..bundle.pack import pack
from ..errors import PackagePublishError, PublishError
from ..schemas.workspace import Unit
from ..workspace.metadata import MetadataProvider, load_workspace
from ..workspace.selection import determine_units_to_publish
from ..workspace.targets import determine_target
from .adapters import RegistryClient
from .models import PublishOptions, PublishResult

logger = logging.getLogger(__name__)


def publish_workspace(
    options: PublishOptions,
    *,
    metadata_provider: MetadataProvider,
    compiler: Compiler,
    registry: RegistryClient,
    current_dir: Optional[Path] = None,
) -> List[PublishResult]:
    """Publish every selected crate, stopping at the first failure."""

    workspace = load_workspace(
        metadata_provider,
        manifest_path=options.manifest_path,
        features=options.features,
        all_features=options.all_features,
        no_default_features=options.no_default_features,
    )
    units = determine_units_to_publish(
        workspace,
        all_members=options.workspace,
        current_dir=current_dir or Path.cwd(),
        exclude=options.exclude,
    )

    output_dir = workspace.target_directory / "wapm"
    results: List[PublishResult] = []
    for unit in units:
        try:
            result = publish_unit(
                unit,
                target_dir=workspace.target_directory,
                dest=output_dir / unit.name,
                options=options,
                compiler=compiler,
                registry=registry,
            )
        except PublishError as exc:
            raise PackagePublishError(unit.name) from exc
        results.append(result)
    return results


def publish_unit(
    unit: Unit,
    *,
    target_dir: Path,
    dest: Path,
    options: PublishOptions,
    compiler: Compiler,
    registry: RegistryClient,
) -> PublishResult:
    logger.info("Publishing %s (dry_run=%s)", unit.name, options.dry_run)

    target = determine_target(unit)
    manifest = generate_manifest(unit, target)
    module = manifest.module[0]
    wasm_path = compile_to_wasm(
        unit,
        target,
        abi=module.abi,
        target_dir=target_dir,
        debug=options.debug,
        compiler=compiler,
    )
    manifest_path = pack(dest, manifest, wasm_path, unit)
    registry.publish(dest, unit=unit.name, dry_run=options.dry_run)

    logger.info("Published %s", manifest.package.name)
    return PublishResult(
        unit=unit.name,
        package=manifest.package.name,
        version=manifest.package.version,
        package_dir=dest,
        manifest_path=manifest_path,
        wasm_path=wasm_path,
        dry_run=options.dry_run,
    )
