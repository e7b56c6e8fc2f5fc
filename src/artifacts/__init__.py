"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from parse.frontend import Frontend
    from rules.config import BundleConfig


def generate_all_artifacts(
    *,
    root: Path,
    entry: str | None = None,
    out_dir: Path | None = None,
    config: BundleConfig | None = None,
    frontend: Frontend | None = None,
) -> dict[str, object]:
    """Generate artifacts via lazy import to avoid package import cycles."""
    from artifacts.write import generate_all_artifacts as _generate_all_artifacts

    return _generate_all_artifacts(
        root=root, entry=entry, out_dir=out_dir, config=config, frontend=frontend
    )


__all__ = ["generate_all_artifacts"]
