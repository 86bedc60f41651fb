"""Manifest synthesis, compilation and package assembly."""

from .compiler import BuildRequest, CargoCompiler, Compiler, compile_to_wasm, target_triple, wasm_path
from .manifest import MANIFEST_FILENAME, dump_manifest, generate_manifest, load_manifest, render_manifest
from .pack import copy, pack

__all__ = [
    "BuildRequest",
    "CargoCompiler",
    "Compiler",
    "MANIFEST_FILENAME",
    "compile_to_wasm",
    "copy",
    "dump_manifest",
    "generate_manifest",
    "load_manifest",
    "pack",
    "render_manifest",
    "target_triple",
    "wasm_path",
]
