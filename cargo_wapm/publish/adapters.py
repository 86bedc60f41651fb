"""Registry clients used to upload an assembled package."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..errors import PublishFailedError, ToolNotFoundError
from ..utils import format_command, wapm_bin

logger = logging.getLogger(__name__)


class RegistryClient(ABC):
    name: str

    @abstractmethod
    def publish(self, package_dir: Path, *, unit: str, dry_run: bool) -> None:
        """Upload ``package_dir``, raising on failure."""


class WapmCli(RegistryClient):
    """Shells out to ``wapm publish`` from inside the package directory."""

    name = "wapm"

    def __init__(self, program: Optional[str] = None) -> None:
        self.program = program or wapm_bin()

    def command(self, *, dry_run: bool) -> List[str]:
        cmd = [self.program, "publish"]
        if dry_run:
            cmd.append("--dry-run")
        return cmd

    def publish(self, package_dir: Path, *, unit: str, dry_run: bool) -> None:
        cmd = self.command(dry_run=dry_run)
        logger.debug("Publishing with the wapm CLI: %s (cwd=%s)", format_command(cmd), package_dir)
        try:
            proc = subprocess.run(cmd, cwd=str(package_dir), check=False)
        except OSError as exc:
            raise ToolNotFoundError(self.program) from exc

        if proc.returncode != 0:
            code = proc.returncode if proc.returncode > 0 else None
            raise PublishFailedError(unit, cmd, code)
