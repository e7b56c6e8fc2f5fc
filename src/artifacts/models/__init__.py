"""Model namespace for modpack artifact schemas."""

from artifacts.models.artifacts.dependencies import GraphSummary
from artifacts.models.artifacts.modules import GraphModuleRecord

__all__ = ["GraphModuleRecord", "GraphSummary"]
