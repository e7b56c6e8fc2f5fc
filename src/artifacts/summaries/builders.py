"""Summary builders for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contract.models import ModuleGraph


def graph_edges(graph: ModuleGraph) -> list[tuple[int, int]]:
    """Return the distinct (source, target) identity pairs of a graph, sorted."""
    edges = {
        (record.identity, target)
        for record in graph
        for target in record.reference_map.values()
    }
    return sorted(edges)


def compute_fan_stats(
    edges: list[tuple[str, str]],
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for source, target in edges:
        fan_out[source] = fan_out.get(source, 0) + 1
        fan_in[target] = fan_in.get(target, 0) + 1

    return fan_in, fan_out
