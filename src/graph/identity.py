"""Per-build identity allocation."""

from __future__ import annotations

from typing import get_args

from contract.models import IdentityPolicy

VALID_IDENTITY_POLICIES = frozenset(get_args(IdentityPolicy))


class IdentityAllocator:
    """Hands out module identities for a single build, starting at 0."""

    def __init__(self) -> None:
        self._next = 0

    def next_identity(self) -> int:
        identity = self._next
        self._next += 1
        return identity

    @property
    def allocated(self) -> int:
        """Number of identities handed out so far."""
        return self._next


class LocationIndex:
    """Maps canonical module locations to the identity first assigned to them."""

    def __init__(self) -> None:
        self._identities: dict[str, int] = {}

    def get(self, location: str) -> int | None:
        return self._identities.get(location)

    def add(self, location: str, identity: int) -> None:
        self._identities.setdefault(location, identity)

    def __contains__(self, location: object) -> bool:
        return location in self._identities

    def __len__(self) -> int:
        return len(self._identities)


__all__ = [
    "VALID_IDENTITY_POLICIES",
    "IdentityAllocator",
    "IdentityPolicy",
    "LocationIndex",
]
