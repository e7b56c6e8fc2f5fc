"""Shared utilities for modpack."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_location(path: str | Path) -> Path:
    """Return an absolute, lexically normalized path.

    Only path joining rules apply: ``..`` segments are collapsed without
    consulting the filesystem, so symlinks are left as they are.
    """
    return Path(os.path.abspath(path))


def relative_posix(location: str | Path, root: Path) -> str:
    """Return ``location`` relative to ``root`` as a POSIX path.

    Locations outside ``root`` keep their ``..`` segments.
    """
    return Path(os.path.relpath(location, root)).as_posix()


def path_to_module(file_path: str | Path) -> str:
    """Convert a relative file path to a dotted module name.

    Args:
        file_path: Relative file path (e.g., "app/util/strings.py" or Path object)

    Returns:
        Module name (e.g., "app.util.strings")

    Examples:
        >>> path_to_module("app/util/strings.py")
        'app.util.strings'
        >>> path_to_module("app/util/__init__.py")
        'app.util'
        >>> path_to_module("../shared/log.py")
        'log'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    module_parts = [
        part for part in path_str.replace("\\", "/").split("/") if part not in ("", ".")
    ]

    # Paths that leave the root have no package above them: name by file stem.
    if ".." in module_parts:
        module_parts = module_parts[-1:]

    if module_parts:
        module_parts[-1] = module_parts[-1].split(".", 1)[0] or module_parts[-1]

    if len(module_parts) > 1 and module_parts[-1] == "__init__":
        module_parts = module_parts[:-1]

    if not module_parts or module_parts[-1] == "":
        msg = f"cannot derive a non-empty module name from {path_str!r}"
        raise ValueError(msg)

    return ".".join(module_parts)
