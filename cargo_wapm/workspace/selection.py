"""Decide which workspace members get published."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from ..errors import ResolutionError
from ..schemas.workspace import Unit, Workspace

logger = logging.getLogger(__name__)


def determine_units_to_publish(
    workspace: Workspace,
    *,
    all_members: bool,
    current_dir: Path,
    exclude: Sequence[str] = (),
) -> List[Unit]:
    logger.debug("Determining which crates to publish")
    members = workspace.members()

    if all_members:
        return _publishable_members(members, exclude)

    # Packages can be nested, so the deepest one containing the current
    # directory wins.
    candidates = [unit for unit in members if current_dir.is_relative_to(unit.manifest_dir)]
    candidates.sort(key=lambda unit: len(unit.manifest_path.parts))
    if candidates:
        return [candidates[-1]]

    root = workspace.root_package()
    if root is not None:
        logger.debug("Falling back to the root package %s", root.name)
        return [root]

    raise ResolutionError(
        'Unable to determine which package to publish. Either "cd" into the crate '
        'folder or use the "--workspace" flag.'
    )


def _publishable_members(members: Sequence[Unit], exclude: Sequence[str]) -> List[Unit]:
    logger.debug("Looking for publishable packages in the workspace")
    units: List[Unit] = []
    for unit in members:
        if unit.name in exclude:
            logger.debug("Explicitly ignoring %s", unit.name)
            continue
        if not unit.has_wapm_metadata:
            logger.debug(
                "Skipping %s because it doesn't contain a [package.metadata.wapm] table",
                unit.name,
            )
            continue
        units.append(unit)
    return units
