"""Dependency summary models for module graphs."""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION
from contract.models import IdentityPolicy


class GraphSummary(BaseModel):
    """Summary of module graph metrics."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    entry: str
    identity_policy: IdentityPolicy
    module_count: int
    reference_count: int
    edge_count: int
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)
    top_modules: list[str] = Field(default_factory=list)


__all__ = ["GraphSummary"]
