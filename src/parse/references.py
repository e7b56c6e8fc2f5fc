"""Resolution of dependency references to module locations."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from contract.errors import ResolutionError
from utils import normalize_location

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_SUFFIXES: tuple[str, ...] = (".py",)

_DOTTED_REFERENCE = re.compile(
    r"^(?P<dots>\.+)(?P<name>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)?$"
)


def is_dotted_reference(reference: str) -> bool:
    """Return True for Python-style relative references such as ``..pkg.mod``."""
    return _DOTTED_REFERENCE.match(reference) is not None


def _dotted_candidates(
    directory: Path, reference: str, suffixes: Sequence[str]
) -> list[Path]:
    match = _DOTTED_REFERENCE.match(reference)
    if match is None:
        return []

    base = directory
    for _ in range(len(match.group("dots")) - 1):
        base = base.parent

    name = match.group("name")
    if not name:
        return [base / f"__init__{suffix}" for suffix in suffixes]

    target = base.joinpath(*name.split("."))
    return [
        *(target.with_name(target.name + suffix) for suffix in suffixes),
        *(target / f"__init__{suffix}" for suffix in suffixes),
    ]


def _path_candidates(
    directory: Path, reference: str, suffixes: Sequence[str]
) -> list[Path]:
    target = normalize_location(directory / reference)
    return [
        target,
        *(target.with_name(target.name + suffix) for suffix in suffixes),
        *(target / f"__init__{suffix}" for suffix in suffixes),
    ]


def reference_candidates(
    directory: Path,
    reference: str,
    *,
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
) -> list[Path]:
    """List the locations a reference may name, in probing order.

    Args:
        directory: Directory containing the referring module.
        reference: Reference exactly as written in the source.
        suffixes: File suffixes probed for extension-less references.

    Returns:
        Candidate paths; the first existing file wins.

    Examples:
        >>> [p.as_posix() for p in reference_candidates(Path("/app/pkg"), ".util")]
        ['/app/pkg/util.py', '/app/pkg/util/__init__.py']
        >>> [p.as_posix() for p in reference_candidates(Path("/app/pkg"), "..")]
        ['/app/__init__.py']
    """
    if not reference:
        return []
    if is_dotted_reference(reference):
        return _dotted_candidates(directory, reference, suffixes)
    return _path_candidates(directory, reference, suffixes)


def resolve_reference(
    directory: Path,
    reference: str,
    *,
    referrer: str,
    suffixes: Sequence[str] = DEFAULT_SUFFIXES,
) -> Path:
    """Resolve a dependency reference relative to its module's directory.

    Raises:
        ResolutionError: If no candidate location is an existing file.
    """
    candidates = reference_candidates(directory, reference, suffixes=suffixes)
    for candidate in candidates:
        if candidate.is_file():
            return normalize_location(candidate)
    raise ResolutionError(reference, referrer, candidates)


__all__ = [
    "DEFAULT_SUFFIXES",
    "is_dotted_reference",
    "reference_candidates",
    "resolve_reference",
]
