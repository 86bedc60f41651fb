from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from cargo_wapm.schemas import Target, Unit

UNSET: Any = object()


def _make_unit(
    directory: Path,
    name: str = "hello-world",
    *,
    version: str = "0.1.0",
    description: Optional[str] = "Say hello from WebAssembly.",
    targets: Optional[List[Target]] = None,
    metadata: Any = UNSET,
    license_file: Optional[str] = None,
    readme: Optional[str] = None,
) -> Unit:
    if metadata is UNSET:
        metadata = {"wapm": {"namespace": "wasmer"}}
    if targets is None:
        targets = [Target(name=name, kind=["bin"], crate_types=["bin"])]
    return Unit(
        id=f"{name} {version} (path+file://{directory})",
        name=name,
        version=version,
        description=description,
        license="MIT OR Apache-2.0",
        license_file=Path(license_file) if license_file else None,
        readme=Path(readme) if readme else None,
        repository="https://github.com/wasmerio/hello-world",
        homepage=None,
        manifest_path=directory / "Cargo.toml",
        metadata=metadata,
        targets=targets,
    )


def _cargo_metadata_payload(
    workspace_root: Path,
    packages: List[Dict[str, Any]],
    *,
    members: Optional[List[str]] = None,
    root: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "packages": packages,
        "workspace_members": members if members is not None else [pkg["id"] for pkg in packages],
        "resolve": {"nodes": [], "root": root},
        "target_directory": str(workspace_root / "target"),
        "version": 1,
        "workspace_root": str(workspace_root),
        "metadata": None,
    }


def _cargo_package(directory: Path, name: str, **overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "name": name,
        "version": "0.1.0",
        "id": f"{name} 0.1.0 (path+file://{directory})",
        "license": "MIT",
        "license_file": None,
        "description": f"The {name} crate",
        "source": None,
        "dependencies": [],
        "targets": [
            {
                "kind": ["cdylib"],
                "crate_types": ["cdylib"],
                "name": name,
                "src_path": str(directory / "src" / "lib.rs"),
                "edition": "2021",
                "doc": True,
                "doctest": False,
                "test": True,
            }
        ],
        "features": {},
        "manifest_path": str(directory / "Cargo.toml"),
        "metadata": {"wapm": {"namespace": "wasmer"}},
        "publish": None,
        "authors": [],
        "categories": [],
        "keywords": [],
        "readme": None,
        "repository": None,
        "homepage": None,
        "documentation": None,
        "edition": "2021",
        "links": None,
        "default_run": None,
        "rust_version": None,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_unit() -> Callable[..., Unit]:
    return _make_unit


@pytest.fixture()
def cargo_package() -> Callable[..., Dict[str, Any]]:
    return _cargo_package


@pytest.fixture()
def cargo_metadata_payload() -> Callable[..., Dict[str, Any]]:
    return _cargo_metadata_payload
