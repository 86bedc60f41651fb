"""Load workspace metadata through ``cargo metadata``."""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from ..errors import MetadataError
from ..schemas.workspace import Workspace
from ..utils import cargo_bin, format_command

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Features:
    """A set of crate features to activate."""

    names: tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> "Features":
        """Parse a comma- or space-delimited feature list."""

        names = [item.strip() for item in value.replace(",", " ").split()]
        return cls(names=tuple(name for name in names if name))

    def __bool__(self) -> bool:
        return bool(self.names)

    def __str__(self) -> str:
        return ",".join(self.names)


@dataclass(slots=True)
class MetadataRequest:
    """Inputs forwarded to the metadata source."""

    manifest_path: Optional[Path] = None
    features: Features = field(default_factory=Features)
    all_features: bool = False
    no_default_features: bool = False


class MetadataProvider(ABC):
    @abstractmethod
    def load(self, request: MetadataRequest) -> Workspace:
        ...


class CargoMetadataProvider(MetadataProvider):
    """Runs ``cargo metadata`` and parses its JSON output."""

    def __init__(self, program: Optional[str] = None) -> None:
        self.program = program or cargo_bin()

    def command(self, request: MetadataRequest) -> List[str]:
        cmd = [self.program, "metadata", "--format-version", "1"]
        if request.manifest_path is not None:
            cmd.extend(["--manifest-path", str(request.manifest_path)])
        if request.no_default_features:
            cmd.append("--no-default-features")
        if request.all_features:
            cmd.append("--all-features")
        if request.features:
            cmd.extend(["--features", str(request.features)])
        return cmd

    def load(self, request: MetadataRequest) -> Workspace:
        cmd = self.command(request)
        logger.debug("Reading workspace metadata: %s", format_command(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise MetadataError(f'Unable to start "{self.program}". Is it installed?') from exc

        if proc.returncode != 0:
            detail = proc.stderr.strip()
            message = f"`{format_command(cmd)}` exited with code {proc.returncode}"
            raise MetadataError(f"{message}: {detail}" if detail else message)

        return parse_metadata(proc.stdout)


def parse_metadata(text: str) -> Workspace:
    """Parse the JSON document printed by ``cargo metadata --format-version 1``."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataError(f"Unable to parse the output of cargo metadata: {exc}") from exc
    if not isinstance(payload, dict):
        raise MetadataError("Unable to parse the output of cargo metadata: expected a JSON object")

    resolve = payload.get("resolve") or {}
    try:
        return Workspace.model_validate({**payload, "root": resolve.get("root")})
    except ValidationError as exc:
        raise MetadataError(f"Invalid cargo metadata: {exc}") from exc


def load_workspace(
    provider: MetadataProvider,
    *,
    manifest_path: Optional[Path] = None,
    features: Iterable[str] = (),
    all_features: bool = False,
    no_default_features: bool = False,
) -> Workspace:
    request = MetadataRequest(
        manifest_path=manifest_path,
        features=Features(names=tuple(features)),
        all_features=all_features,
        no_default_features=no_default_features,
    )
    return provider.load(request)
