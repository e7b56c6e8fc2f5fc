"""Error taxonomy for modpack builds.

Every failure is fatal to the build that raised it. Errors carry the offending
reference and the referring module's location whenever one is known.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class BundleError(Exception):
    """Base class for errors raised while building a module graph or bundle."""


def _context(reference: str | None, referrer: str | None) -> str:
    if reference is None:
        return ""
    if referrer is None:
        return f" (reference {reference!r})"
    return f" (reference {reference!r} in {referrer})"


class FrontendError(BundleError):
    """Raised when the frontend cannot read or parse a module."""

    def __init__(
        self,
        location: str | Path,
        reason: str,
        *,
        reference: str | None = None,
        referrer: str | None = None,
    ) -> None:
        self.location = str(location)
        self.reason = reason
        self.reference = reference
        self.referrer = referrer
        super().__init__(
            f"{self.location}: {reason}{_context(reference, referrer)}"
        )

    def with_reference(self, reference: str, referrer: str) -> FrontendError:
        """Return a copy of this error attributed to a dependency reference."""
        return FrontendError(
            self.location,
            self.reason,
            reference=reference,
            referrer=referrer,
        )


class ResolutionError(BundleError):
    """Raised when a dependency reference does not name an existing file."""

    def __init__(
        self,
        reference: str,
        referrer: str,
        candidates: Sequence[str | Path] = (),
    ) -> None:
        self.reference = reference
        self.referrer = referrer
        self.candidates = tuple(str(candidate) for candidate in candidates)
        msg = f"cannot resolve {reference!r} from {referrer}"
        if self.candidates:
            msg += f"; tried: {', '.join(self.candidates)}"
        super().__init__(msg)


class GraphLimitError(BundleError):
    """Raised when a build would create more module records than allowed."""

    def __init__(
        self,
        limit: int,
        *,
        reference: str | None = None,
        referrer: str | None = None,
    ) -> None:
        self.limit = limit
        self.reference = reference
        self.referrer = referrer
        super().__init__(
            f"module graph exceeds max_modules={limit}"
            f"{_context(reference, referrer)}"
        )


__all__ = [
    "BundleError",
    "FrontendError",
    "GraphLimitError",
    "ResolutionError",
]
