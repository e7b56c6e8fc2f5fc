"""Artifact generators for modpack."""

from artifacts.generators.bundle import BundleGenerator
from artifacts.generators.modules import ModulesGenerator
from artifacts.generators.summary import GraphSummaryGenerator

__all__ = [
    "BundleGenerator",
    "GraphSummaryGenerator",
    "ModulesGenerator",
]
