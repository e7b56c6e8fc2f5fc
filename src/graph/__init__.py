"""Module graph construction."""

from graph.builder import GraphBuilder, build_graph
from graph.identity import (
    VALID_IDENTITY_POLICIES,
    IdentityAllocator,
    IdentityPolicy,
    LocationIndex,
)

__all__ = [
    "VALID_IDENTITY_POLICIES",
    "GraphBuilder",
    "IdentityAllocator",
    "IdentityPolicy",
    "LocationIndex",
    "build_graph",
]
