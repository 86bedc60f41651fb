"""Exceptions raised by the publish pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class PublishError(RuntimeError):
    """Base class for every failure surfaced by cargo-wapm."""


class MetadataError(PublishError):
    """Raised when the workspace metadata cannot be loaded or parsed."""


class ResolutionError(PublishError):
    """Raised when no unit can be selected for publishing."""


class UnitError(PublishError):
    """A failure tied to one unit of the workspace."""

    def __init__(self, unit: str, message: str) -> None:
        super().__init__(message)
        self.unit = unit


class NoPublishableTargetError(UnitError):
    def __init__(self, unit: str) -> None:
        super().__init__(
            unit,
            f'The {unit} package doesn\'t contain any binaries or "cdylib" libraries',
        )


class AmbiguousTargetError(UnitError):
    def __init__(self, unit: str, candidates: Sequence[tuple[str, Sequence[str]]]) -> None:
        described = ", ".join(f"{name} ({', '.join(kinds)})" for name, kinds in candidates)
        super().__init__(
            unit,
            "Unable to decide what to publish. Expected one executable or "
            f'"cdylib" library in {unit}, but found {described}',
        )
        self.candidates = [(name, list(kinds)) for name, kinds in candidates]


class InvalidMetadataError(UnitError):
    """Raised when ``[package.metadata.wapm]`` has an unexpected shape."""


class MissingDescriptionError(UnitError):
    """Raised when the unit's description is absent or empty."""


class ToolNotFoundError(PublishError):
    def __init__(self, program: str) -> None:
        super().__init__(f'Unable to start "{program}". Is it installed?')
        self.program = program


class BuildFailedError(UnitError):
    def __init__(self, unit: str, command: Sequence[str], returncode: Optional[int]) -> None:
        if returncode is None:
            message = "Cargo exited unsuccessfully"
        else:
            message = f"Cargo exited unsuccessfully with exit code {returncode}"
        super().__init__(unit, f"{message} (command: {' '.join(command)})")
        self.command = list(command)
        self.returncode = returncode


class ArtifactNotFoundError(UnitError):
    def __init__(self, unit: str, path: Path) -> None:
        super().__init__(unit, f'Expected "{path}" to exist')
        self.path = path


class AssemblyIOError(PublishError):
    def __init__(self, source: Optional[Path], destination: Path, reason: str) -> None:
        if source is None:
            message = f'Unable to write to "{destination}": {reason}'
        else:
            message = f'Unable to copy "{source}" to "{destination}": {reason}'
        super().__init__(message)
        self.source = source
        self.destination = destination


class PathOutsideUnitError(UnitError):
    def __init__(self, unit: str, path: Path, base_dir: Path) -> None:
        super().__init__(unit, f'"{path}" should be inside "{base_dir}"')
        self.path = path
        self.base_dir = base_dir


class PackagePublishError(UnitError):
    """Wraps any failure that happened while publishing one unit."""

    def __init__(self, unit: str) -> None:
        super().__init__(unit, f'Unable to publish "{unit}"')


class PublishFailedError(UnitError):
    def __init__(self, unit: str, command: Sequence[str], returncode: Optional[int]) -> None:
        if returncode is None:
            message = "The wapm CLI exited unsuccessfully"
        else:
            message = f"The wapm CLI exited unsuccessfully with exit code {returncode}"
        super().__init__(unit, message)
        self.command = list(command)
        self.returncode = returncode


__all__ = [
    "PublishError",
    "MetadataError",
    "ResolutionError",
    "UnitError",
    "NoPublishableTargetError",
    "AmbiguousTargetError",
    "InvalidMetadataError",
    "MissingDescriptionError",
    "ToolNotFoundError",
    "BuildFailedError",
    "ArtifactNotFoundError",
    "AssemblyIOError",
    "PathOutsideUnitError",
    "PackagePublishError",
    "PublishFailedError",
]
