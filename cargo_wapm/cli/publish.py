"""Command-line entry point: ``cargo wapm``."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from dotenv import load_dotenv

from cargo_wapm import __version__
from cargo_wapm.bundle.compiler import CargoCompiler
from cargo_wapm.errors import PublishError
from cargo_wapm.publish import PublishOptions, WapmCli, publish_workspace
from cargo_wapm.workspace.metadata import CargoMetadataProvider, Features

LOG_LEVEL_ENV = "CARGO_WAPM_LOG"


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(Path.cwd() / ".env", override=False)
    args_list = list(sys.argv[1:] if argv is None else argv)
    # cargo runs `cargo-wapm wapm ...` for `cargo wapm ...`.
    if args_list[:1] == ["wapm"]:
        args_list = args_list[1:]

    parser = _build_parser()
    args = parser.parse_args(args_list)
    _configure_logging(args.verbose)

    options = PublishOptions(
        dry_run=args.dry_run,
        manifest_path=Path(args.manifest_path) if args.manifest_path else None,
        workspace=args.workspace,
        features=list(args.features.names) if args.features else [],
        all_features=args.all_features,
        no_default_features=args.no_default_features,
        exclude=list(args.exclude or []),
        debug=args.debug,
    )

    try:
        results = publish_workspace(
            options,
            metadata_provider=CargoMetadataProvider(),
            compiler=CargoCompiler(),
            registry=WapmCli(),
        )
    except PublishError as exc:
        _report_error(exc)
        return 1

    _print_json(
        {
            "dry_run": options.dry_run,
            "packages": [result.to_dict() for result in results],
        }
    )
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo-wapm",
        description="Publish a crate to the WebAssembly Package Manager.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        default=_env_flag("DRY_RUN"),
        help="Build the package, but don't publish it.",
    )
    parser.add_argument(
        "--manifest-path",
        default=os.environ.get("MANIFEST_PATH") or None,
        help="Path to Cargo.toml",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        action="store_true",
        default=_env_flag("WORKSPACE"),
        help="Publish every crate in this workspace",
    )
    parser.add_argument(
        "--features",
        type=Features.parse,
        help="A comma-delimited list of features to enable.",
    )
    parser.add_argument("--all-features", action="store_true", help="Compile with all features enabled.")
    parser.add_argument(
        "--no-default-features",
        action="store_true",
        help="Do not activate the `default` feature while compiling.",
    )
    parser.add_argument("--exclude", action="append", help="Packages to ignore (repeatable).")
    parser.add_argument("--debug", action="store_true", help="Compile in debug mode.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    return parser


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _log_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    # Unknown level names fall back to WARNING.
    return logging.getLevelNamesMapping().get(name, logging.WARNING)


def _configure_logging(verbosity: int) -> None:
    logging.basicConfig(
        level=_log_level(verbosity),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _report_error(exc: BaseException) -> None:
    lines: List[str] = [f"error: {exc}"]
    cause = exc.__cause__
    while cause is not None:
        lines.append(f"  caused by: {cause}")
        cause = cause.__cause__
    print("\n".join(lines), file=sys.stderr)


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":
    raise SystemExit(main())
