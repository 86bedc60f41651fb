from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Callable

import pytest
from pydantic import ValidationError

from cargo_wapm.bundle import dump_manifest, generate_manifest, load_manifest, render_manifest
from cargo_wapm.errors import InvalidMetadataError, MissingDescriptionError, PathOutsideUnitError
from cargo_wapm.schemas import Abi, Package, PackageManifest, Target, Unit, WaiBindings, WitBindings


def test_binary_manifest_has_command(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello-world", kind=["bin"])
    unit = make_unit(
        tmp_path,
        targets=[target],
        metadata={"wapm": {"namespace": "wasmer", "abi": "wasi", "wasmer-extra-flags": "--enable-threads"}},
        license_file="LICENSE-MIT",
        readme="../README.md",
    )

    manifest = generate_manifest(unit, target)

    assert manifest.package.name == "wasmer/hello-world"
    assert manifest.package.version == "0.1.0"
    assert manifest.package.wasmer_extra_flags == "--enable-threads"
    assert manifest.package.license_file == Path("LICENSE-MIT")
    assert manifest.package.readme == Path("README.md")
    assert manifest.package.disable_command_rename is False
    assert manifest.package.rename_commands_to_raw_command_name is False
    assert manifest.dependencies is None
    assert manifest.base_directory_path == Path()

    [module] = manifest.module
    assert module.name == "hello-world"
    assert module.source == Path("hello-world.wasm")
    assert module.abi is Abi.WASI
    assert module.interfaces is None

    [command] = manifest.command
    assert command.name == "hello-world"
    assert command.module == "hello-world"
    assert command.package == "wasmer/hello-world"


def test_library_manifest_has_no_commands(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="wasm-lib", kind=["cdylib"])
    unit = make_unit(
        tmp_path,
        name="wasm-lib",
        targets=[target],
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "fs": {"/data": "assets"},
                "bindings": {"wit-bindgen": "0.1.0", "wit-exports": "exports.wit"},
            }
        },
    )

    manifest = generate_manifest(unit, target)

    assert manifest.command is None
    assert manifest.fs == {"/data": "assets"}
    [module] = manifest.module
    assert module.source == Path("wasm_lib.wasm")
    assert module.abi is Abi.NONE
    assert isinstance(module.bindings, WitBindings)
    assert module.bindings.wit_exports == Path("exports.wit")


def test_package_override_replaces_unit_name(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello-world", kind=["bin"])
    unit = make_unit(tmp_path, metadata={"wapm": {"namespace": "acme", "package": "greeter"}})

    manifest = generate_manifest(unit, target)

    assert manifest.package.name == "acme/greeter"
    assert manifest.command[0].package == "acme/greeter"


def test_wai_bindings_are_recognised(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello-world", kind=["cdylib"])
    unit = make_unit(
        tmp_path,
        targets=[target],
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "bindings": {
                    "wai-version": "0.2.0",
                    "exports": "wai/exports.wai",
                    "imports": ["wai/env.wai"],
                },
            }
        },
    )

    bindings = generate_manifest(unit, target).module[0].bindings

    assert isinstance(bindings, WaiBindings)
    assert bindings.referenced_files(tmp_path) == [tmp_path / "wai/exports.wai", tmp_path / "wai/env.wai"]


def test_absolute_binding_paths_are_made_relative(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    crate = tmp_path / "crate"
    target = Target(name="hello-world", kind=["bin"])
    unit = make_unit(
        crate,
        targets=[target],
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "bindings": {"wit-bindgen": "0.1.0", "wit-exports": str(crate / "bindings" / "x.wit")},
            }
        },
    )

    manifest = generate_manifest(unit, target)

    assert manifest.module[0].bindings == WitBindings(wit_bindgen="0.1.0", wit_exports=Path("bindings/x.wit"))


def test_absolute_wai_paths_are_made_relative(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello_world", kind=["cdylib"])
    unit = make_unit(
        tmp_path,
        targets=[target],
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "bindings": {
                    "wai-version": "0.2.0",
                    "exports": str(tmp_path / "wai" / ".." / "exports.wai"),
                    "imports": ["wai/env.wai", str(tmp_path / "wai" / "fs.wai")],
                },
            }
        },
    )

    bindings = generate_manifest(unit, target).module[0].bindings

    assert bindings == WaiBindings(
        wai_version="0.2.0",
        exports=Path("exports.wai"),
        imports=[Path("wai/env.wai"), Path("wai/fs.wai")],
    )


def test_absolute_binding_outside_the_crate_is_rejected(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    crate = tmp_path / "crate"
    target = Target(name="hello-world", kind=["bin"])
    unit = make_unit(
        crate,
        targets=[target],
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "bindings": {"wit-bindgen": "0.1.0", "wit-exports": str(tmp_path / "shared" / "x.wit")},
            }
        },
    )

    with pytest.raises(PathOutsideUnitError) as excinfo:
        generate_manifest(unit, target)

    assert excinfo.value.unit == "hello-world"
    assert excinfo.value.path == tmp_path / "shared" / "x.wit"
    assert excinfo.value.base_dir == crate


def test_missing_and_empty_descriptions_are_distinct(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello-world", kind=["bin"])

    with pytest.raises(MissingDescriptionError) as missing:
        generate_manifest(make_unit(tmp_path, description=None), target)
    with pytest.raises(MissingDescriptionError) as empty:
        generate_manifest(make_unit(tmp_path, description=""), target)

    assert "wasn't set" in str(missing.value)
    assert "is empty" in str(empty.value)
    assert str(missing.value) != str(empty.value)


@pytest.mark.parametrize(
    "metadata",
    [
        None,
        {"docs": {}},
        {"wapm": {"abi": "wasi"}},
        {"wapm": {"namespace": "wasmer", "abi": "native"}},
        {"wapm": {"namespace": "wasmer", "bindings": {"unknown": "field"}}},
    ],
)
def test_invalid_metadata_table(make_unit: Callable[..., Unit], tmp_path: Path, metadata: object) -> None:
    unit = make_unit(tmp_path, metadata=metadata)

    with pytest.raises(InvalidMetadataError) as excinfo:
        generate_manifest(unit, unit.targets[0])

    assert excinfo.value.unit == "hello-world"


def test_manifest_rejects_absolute_paths() -> None:
    with pytest.raises(ValidationError):
        PackageManifest(
            package=Package(name="a/b", version="1.0.0", description="x", readme=Path("/abs/README.md")),
        )


def test_rendered_manifest_uses_wapm_keys(make_unit: Callable[..., Unit], tmp_path: Path) -> None:
    target = Target(name="hello-world", kind=["bin"])
    unit = make_unit(
        tmp_path,
        metadata={
            "wapm": {
                "namespace": "wasmer",
                "abi": "emscripten",
                "fs": {"/etc": "etc"},
                "bindings": {"wit-bindgen": "0.1.0", "wit-exports": "bindings/x.wit"},
            }
        },
        license_file="LICENSE",
    )
    manifest = generate_manifest(unit, target)

    document = tomllib.loads(render_manifest(manifest))

    assert document["package"]["license-file"] == "LICENSE"
    assert "readme" not in document["package"]
    assert "dependencies" not in document
    assert "base_directory_path" not in document
    assert document["module"] == [
        {
            "name": "hello-world",
            "source": "hello-world.wasm",
            "abi": "emscripten",
            "bindings": {"wit-bindgen": "0.1.0", "wit-exports": "bindings/x.wit"},
        }
    ]
    assert document["command"] == [
        {"name": "hello-world", "module": "hello-world", "package": "wasmer/hello-world"}
    ]
    assert document["fs"] == {"/etc": "etc"}

    path = tmp_path / "out" / "wapm.toml"
    dump_manifest(manifest, path)
    assert load_manifest(path) == manifest
