"""Shared helpers for locating and describing external tools."""

from __future__ import annotations

import os
import shlex
from typing import Sequence


def cargo_bin() -> str:
    """Return the cargo executable, honoring ``$CARGO`` when cargo invoked us."""

    return os.environ.get("CARGO") or "cargo"


def wapm_bin() -> str:
    """Return the wapm CLI executable, honoring ``$WAPM``."""

    return os.environ.get("WAPM") or "wapm"


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(part)) for part in command)
