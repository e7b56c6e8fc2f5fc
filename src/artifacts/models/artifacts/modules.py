"""Module graph listing models.

One record per module identity, as written to modules.jsonl.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


def _artifact_schema_version() -> int:
    from contract.artifacts import ARTIFACT_SCHEMA_VERSION

    return ARTIFACT_SCHEMA_VERSION


class GraphModuleRecord(BaseModel):
    """A module of the bundle graph, with paths relative to the project root."""

    schema_version: int = Field(default_factory=_artifact_schema_version)
    identity: int
    path: str
    module: str
    dependency_references: list[str] = Field(default_factory=list)
    reference_map: dict[str, int] = Field(default_factory=dict)


__all__ = ["GraphModuleRecord"]
