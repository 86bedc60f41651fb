"""Pick the build target that gets published for a unit."""

from __future__ import annotations

from ..errors import AmbiguousTargetError, NoPublishableTargetError
from ..schemas.workspace import Target, Unit


def determine_target(unit: Unit) -> Target:
    candidates = [
        target for target in unit.targets if target.is_webassembly_library or target.is_binary
    ]
    if not candidates:
        raise NoPublishableTargetError(unit.name)
    if len(candidates) > 1:
        raise AmbiguousTargetError(unit.name, [(target.name, target.kind) for target in candidates])
    return candidates[0]


def wasm_binary_name(target: Target) -> str:
    """File stem rustc gives the compiled artifact.

    rustc keeps dashes in binary names but converts them to underscores for
    libraries.
    """

    if target.is_binary:
        return target.name
    return target.name.replace("-", "_")
