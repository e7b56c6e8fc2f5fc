"""Command-line interface for modpack."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.write import build_bundle, generate_all_artifacts
from contract.errors import BundleError
from graph.identity import VALID_IDENTITY_POLICIES
from rules.config import BundleConfig, ConfigError, load_config
from verify.verify import verify_determinism


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "entry",
        nargs="?",
        default=None,
        help="Entry module, relative to the root (default: config entry)",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root (default: .)",
    )


def _add_build_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--identity-policy",
        choices=sorted(VALID_IDENTITY_POLICIES),
        default=None,
        help="Module identity policy (default: config identity_policy)",
    )
    parser.add_argument(
        "--cache-exports",
        action="store_true",
        default=None,
        help="Emit a loader that memoizes module exports",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modpack")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log graph construction and assembly to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    bundle_parser = subparsers.add_parser(
        "bundle", help="Write the bundle script for an entry module"
    )
    _add_common_args(bundle_parser)
    _add_build_args(bundle_parser)
    bundle_parser.add_argument(
        "-o",
        "--output",
        default="-",
        help="Output file, or - for stdout (default: -)",
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Generate the bundle and graph artifacts"
    )
    _add_common_args(generate_parser)
    _add_build_args(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_args(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _effective_config(root: Path, args: argparse.Namespace) -> BundleConfig:
    config = load_config(root)
    overrides: dict[str, object] = {}
    if getattr(args, "identity_policy", None) is not None:
        overrides["identity_policy"] = args.identity_policy
    if getattr(args, "cache_exports", None):
        overrides["cache_exports"] = True
    if overrides:
        config = config.model_copy(update=overrides)
    return config


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(
    root: Path, config: BundleConfig, artifacts_dir: str | None
) -> Path:
    if artifacts_dir is None:
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_bundle(
    root: Path, entry: str | None, config: BundleConfig, output: str
) -> int:
    code = build_bundle(root=root, entry=entry, config=config)
    if output == "-":
        sys.stdout.write(code)
        return 0
    output_path = Path(output).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(code.encode("utf-8"))
    return 0


def _handle_generate(
    root: Path, entry: str | None, config: BundleConfig, out_dir: str | None
) -> int:
    resolved_out_dir = _resolve_output_dir(out_dir)
    generate_all_artifacts(
        root=root, entry=entry, out_dir=resolved_out_dir, config=config
    )
    return 0


def _handle_verify(
    root: Path, entry: str | None, config: BundleConfig, artifacts_dir: str | None
) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, config, artifacts_dir)
    try:
        result = verify_determinism(
            root=root,
            artifacts_dir=resolved_artifacts_dir,
            entry=entry,
            config=config,
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )

    root = Path(args.root).expanduser().resolve()

    try:
        config = _effective_config(root, args)

        if args.command == "bundle":
            return _handle_bundle(root, args.entry, config, args.output)

        if args.command == "generate":
            return _handle_generate(root, args.entry, config, args.out_dir)

        if args.command == "verify":
            return _handle_verify(root, args.entry, config, args.artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except BundleError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
