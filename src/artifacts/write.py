from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.generators import (
    BundleGenerator,
    GraphSummaryGenerator,
    ModulesGenerator,
)
from bundle.assembler import assemble_bundle
from contract.artifacts import GRAPH_ARTIFACT_SPECS
from graph.builder import build_graph
from rules.config import load_config, resolve_entry, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from contract.models import ModuleGraph
    from parse.frontend import Frontend
    from rules.config import BundleConfig

logger = logging.getLogger(__name__)


def _build(
    root: Path,
    entry: str | None,
    config: BundleConfig,
    frontend: Frontend | None,
) -> ModuleGraph:
    entry_path = resolve_entry(root, entry, config)
    return build_graph(entry_path, frontend=frontend, config=config)


def build_bundle(
    *,
    root: Path,
    entry: str | None = None,
    config: BundleConfig | None = None,
    frontend: Frontend | None = None,
) -> str:
    """Build the graph for an entry module and return the bundle source."""
    if config is None:
        config = load_config(root)

    graph = _build(root, entry, config, frontend)
    return assemble_bundle(graph, root=root, cache_exports=config.cache_exports)


def generate_all_artifacts(
    *,
    root: Path,
    entry: str | None = None,
    out_dir: Path | None = None,
    config: BundleConfig | None = None,
    frontend: Frontend | None = None,
) -> dict[str, object]:
    """Generate the bundle and its graph artifacts for a project.

    Args:
        root: Project root; embedded and listed paths are relative to it
        entry: Entry module path (default: config entry)
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration (default: loaded from modpack.toml)
        frontend: Optional frontend (default: the Python frontend)

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    graph = _build(root, entry, config, frontend)

    BundleGenerator().generate(
        root=root,
        out_dir=out_dir,
        graph=graph,
        bundle_name=config.bundle_name,
        cache_exports=config.cache_exports,
    )

    ModulesGenerator().generate(root=root, out_dir=out_dir, graph=graph)

    _, summary = GraphSummaryGenerator().generate(
        root=root,
        out_dir=out_dir,
        graph=graph,
        identity_policy=config.identity_policy,
    )

    artifacts_list = [
        config.bundle_name,
        *(spec.filename for spec in GRAPH_ARTIFACT_SPECS.values()),
    ]
    logger.debug("wrote %d artifacts to %s", len(artifacts_list), out_dir)

    return {
        "module_count": summary["module_count"],
        "edge_count": summary["edge_count"],
        "reference_count": summary["reference_count"],
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
