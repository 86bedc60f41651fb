"""Compile a crate to WebAssembly and locate the resulting binary."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import ArtifactNotFoundError, BuildFailedError, ToolNotFoundError
from ..schemas.manifest import Abi
from ..schemas.workspace import Target, Unit
from ..utils import cargo_bin, format_command
from ..workspace.targets import wasm_binary_name

logger = logging.getLogger(__name__)

_TARGET_TRIPLES = {
    Abi.NONE: "wasm32-unknown-unknown",
    Abi.WASM4: "wasm32-unknown-unknown",
    Abi.WASI: "wasm32-wasi",
    Abi.EMSCRIPTEN: "wasm32-unknown-emscripten",
}


def target_triple(abi: Abi) -> str:
    return _TARGET_TRIPLES[abi]


@dataclass(slots=True, frozen=True)
class BuildRequest:
    unit: str
    manifest_path: Path
    target_triple: str
    release: bool = True

    @property
    def profile(self) -> str:
        return "release" if self.release else "debug"


class Compiler(ABC):
    name: str

    @abstractmethod
    def compile(self, request: BuildRequest) -> None:
        """Compile the crate, raising on failure."""


class CargoCompiler(Compiler):
    name = "cargo"

    def __init__(self, program: Optional[str] = None) -> None:
        self.program = program or cargo_bin()

    def command(self, request: BuildRequest) -> List[str]:
        cmd = [
            self.program,
            "build",
            "--quiet",
            "--manifest-path",
            str(request.manifest_path),
            "--target",
            request.target_triple,
        ]
        if request.release:
            cmd.append("--release")
        return cmd

    def compile(self, request: BuildRequest) -> None:
        cmd = self.command(request)
        logger.debug("Compiling the WebAssembly package: %s", format_command(cmd))
        try:
            proc = subprocess.run(cmd, check=False)
        except OSError as exc:
            raise ToolNotFoundError(self.program) from exc

        if proc.returncode != 0:
            # Negative return codes mean the process was killed by a signal.
            code = proc.returncode if proc.returncode > 0 else None
            raise BuildFailedError(request.unit, cmd, code)


def compile_to_wasm(
    unit: Unit,
    target: Target,
    *,
    abi: Abi,
    target_dir: Path,
    debug: bool,
    compiler: Compiler,
) -> Path:
    """Compile ``target`` and return the path of the produced ``.wasm`` file."""

    request = BuildRequest(
        unit=unit.name,
        manifest_path=unit.manifest_path,
        target_triple=target_triple(abi),
        release=not debug,
    )
    compiler.compile(request)

    binary = wasm_path(target, target_dir=target_dir, request=request)
    if not binary.exists():
        raise ArtifactNotFoundError(unit.name, binary)
    return binary


def wasm_path(target: Target, *, target_dir: Path, request: BuildRequest) -> Path:
    return (
        target_dir
        / request.target_triple
        / request.profile
        / Path(wasm_binary_name(target)).with_suffix(".wasm")
    )
