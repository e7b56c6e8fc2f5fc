"""Graph summary generator for modpack artifacts."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Any

from artifacts.models.artifacts.dependencies import GraphSummary
from artifacts.summaries.builders import compute_fan_stats, graph_edges
from artifacts.utils import _write_json
from contract.artifacts import GRAPH_SUMMARY_JSON
from contract.models import IdentityPolicy, ModuleGraph
from utils import relative_posix


class GraphSummaryGenerator:
    """Generator for graph_summary.json."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "graph_summary"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        **kwargs: Any,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Summarize module and edge counts with fan-in/fan-out by path."""
        graph: ModuleGraph = kwargs["graph"]
        identity_policy: IdentityPolicy = kwargs.get("identity_policy", "per_location")
        top_n: int = kwargs.get("top_n", 10)

        out_dir.mkdir(parents=True, exist_ok=True)

        paths = [relative_posix(record.location, root) for record in graph]
        edges = graph_edges(graph)
        path_edges = [(paths[source], paths[target]) for source, target in edges]

        fan_in, fan_out = compute_fan_stats(path_edges)
        top_modules = sorted(fan_in.keys(), key=lambda m: (-fan_in[m], m))[:top_n]

        summary = GraphSummary(
            entry=paths[0],
            identity_policy=identity_policy,
            module_count=len(graph),
            reference_count=sum(len(r.dependency_references) for r in graph),
            edge_count=len(edges),
            fan_in=dict(sorted(fan_in.items())),
            fan_out=dict(sorted(fan_out.items())),
            top_modules=top_modules,
        )
        _write_json(out_dir / GRAPH_SUMMARY_JSON, summary)

        return [], summary.model_dump()


__all__ = ["GRAPH_SUMMARY_JSON", "GraphSummaryGenerator"]
