"""Publish workflow helpers for cargo-wapm."""

from .adapters import RegistryClient, WapmCli
from .models import PublishOptions, PublishResult
from .publish import publish_unit, publish_workspace

__all__ = [
    "PublishOptions",
    "PublishResult",
    "RegistryClient",
    "WapmCli",
    "publish_unit",
    "publish_workspace",
]
