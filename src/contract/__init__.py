"""Stable surface of modpack-core.

The frontend contract, the module graph model, and the error taxonomy are
what third-party frontends and callers depend on.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    BUNDLE_BANNER,
    GRAPH_ARTIFACT_SPECS,
    GRAPH_SUMMARY_JSON,
    MODULES_JSONL,
    ArtifactSpec,
)
from contract.errors import (
    BundleError,
    FrontendError,
    GraphLimitError,
    ResolutionError,
)
from contract.models import (
    CompiledModule,
    IdentityPolicy,
    ModuleGraph,
    ModuleRecord,
)

__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "BUNDLE_BANNER",
    "GRAPH_ARTIFACT_SPECS",
    "GRAPH_SUMMARY_JSON",
    "MODULES_JSONL",
    "ArtifactSpec",
    "BundleError",
    "CompiledModule",
    "FrontendError",
    "GraphLimitError",
    "IdentityPolicy",
    "ModuleGraph",
    "ModuleRecord",
    "ResolutionError",
]
