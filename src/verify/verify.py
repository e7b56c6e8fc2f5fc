"""Reproducibility check for a bundle and its graph artifacts."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from artifacts.write import generate_all_artifacts

if TYPE_CHECKING:
    from rules.config import BundleConfig


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _relative_files(root: Path) -> set[str]:
    return {
        path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()
    }


def _compare_trees(expected: Path, actual: Path) -> DeterminismResult:
    """Compare two artifact directories by relative path and file bytes."""
    expected_files = _relative_files(expected)
    actual_files = _relative_files(actual)

    missing = tuple(sorted(expected_files - actual_files))
    extra = tuple(sorted(actual_files - expected_files))
    mismatches = tuple(
        name
        for name in sorted(expected_files & actual_files)
        if not filecmp.cmp(expected / name, actual / name, shallow=False)
    )
    return DeterminismResult(
        ok=not (missing or extra or mismatches),
        mismatches=mismatches,
        missing=missing,
        extra=extra,
    )


def verify_determinism(
    *,
    root: Path,
    artifacts_dir: Path,
    entry: str | None = None,
    config: BundleConfig | None = None,
) -> DeterminismResult:
    """Rebuild the artifacts for ``entry`` and compare them with ``artifacts_dir``.

    ``missing`` lists files only the existing directory has, ``extra`` files
    only the rebuild produced, and ``mismatches`` files whose bytes differ.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory(prefix="modpack-verify-") as rebuild_dir:
        rebuilt = Path(rebuild_dir)
        generate_all_artifacts(root=root, entry=entry, out_dir=rebuilt, config=config)
        return _compare_trees(artifacts_dir, rebuilt)
